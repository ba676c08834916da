"""Entry points for loading configurations."""

from __future__ import annotations

from pathlib import Path
from typing import IO

from simpleconfig.document import XmlDocument
from simpleconfig.registry import ComponentRegistry
from simpleconfig.xml_config import XmlConfig

__all__ = ["from_file", "from_stream", "from_string"]


def from_file(path: str | Path, registry: ComponentRegistry | None = None) -> XmlConfig:
    """Load a configuration from an XML file.

    Args:
        path: Path of the configuration file.
        registry: Registry used to resolve component classes. Defaults to
            ``default_registry``.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file is not well-formed.
    """
    return XmlConfig(XmlDocument.parse(path), registry)


def from_stream(
    stream: IO[bytes],
    source: str | Path | None = None,
    registry: ComponentRegistry | None = None,
) -> XmlConfig:
    """Load a configuration from a binary stream.

    ``source`` is the file the content belongs to. Relative nested resources
    resolve against its directory and ``save()`` writes to it.
    """
    return XmlConfig(XmlDocument.from_stream(stream, path=source), registry)


def from_string(
    text: str | bytes,
    source: str | Path | None = None,
    registry: ComponentRegistry | None = None,
) -> XmlConfig:
    """Load a configuration from XML text."""
    return XmlConfig(XmlDocument.from_string(text, path=source), registry)
