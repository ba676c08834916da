"""simpleconfig - Hierarchical configuration with configurable components."""

from __future__ import annotations

# Core
from simpleconfig.config import CLASS_ATTRIBUTE, Config
from simpleconfig.xml_config import XmlConfig
from simpleconfig.document import XmlDocument
from simpleconfig.loader import from_file, from_stream, from_string

# Components
from simpleconfig.component import Configurable
from simpleconfig.registry import ComponentRegistry, default_registry

# Keys
from simpleconfig.keys import KeySegment, attribute_key, parse_key

# Errors
from simpleconfig.errors import (
    BindingFileInvalidError,
    ComponentInitError,
    ComponentLoadError,
    ComponentNotFoundError,
    ConfigError,
    ConfigNotFoundError,
    ConfigNotPersistableError,
    ConfigParseError,
    ErrorCodes,
    InvalidKeyError,
    InvalidRegistrationError,
    NestedResourceError,
    PropertyTypeError,
)

# Utilities
from simpleconfig.utils import StringList

__version__ = "0.1.0"

__all__ = [
    # Core
    "Config",
    "XmlConfig",
    "XmlDocument",
    "CLASS_ATTRIBUTE",
    "from_file",
    "from_stream",
    "from_string",
    # Components
    "Configurable",
    "ComponentRegistry",
    "default_registry",
    # Keys
    "KeySegment",
    "parse_key",
    "attribute_key",
    # Errors
    "ErrorCodes",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigNotPersistableError",
    "InvalidKeyError",
    "PropertyTypeError",
    "NestedResourceError",
    "ComponentNotFoundError",
    "ComponentLoadError",
    "ComponentInitError",
    "InvalidRegistrationError",
    "BindingFileInvalidError",
    # Utilities
    "StringList",
]
