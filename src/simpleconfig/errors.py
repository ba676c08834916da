"""Error hierarchy for the simpleconfig library."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
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
    "ErrorCodes",
]


class ConfigError(Exception):
    """Base error for every configuration failure."""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG_INVALID",
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ConfigError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigParseError(ConfigError):
    """Raised when a configuration document is malformed."""

    def __init__(self, source: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_PARSE_ERROR",
            message=f"Cannot parse configuration '{source}': {reason}",
            details={"source": source, "reason": reason},
            **kwargs,
        )


class ConfigNotPersistableError(ConfigError):
    """Raised when a configuration cannot be written to the requested target."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_NOT_PERSISTABLE", message=message, **kwargs)


class InvalidKeyError(ConfigError):
    """Raised when a key path is malformed."""

    def __init__(self, key: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_KEY",
            message=f"Invalid key '{key}': {reason}",
            details={"key": key, "reason": reason},
            **kwargs,
        )

    @property
    def key(self) -> str:
        """The offending key."""
        return self.details["key"]


class PropertyTypeError(ConfigError):
    """Raised when a present property cannot be converted to the requested type."""

    def __init__(self, key: str, value: str, expected: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROPERTY_TYPE_ERROR",
            message=f"Property '{key}' has value '{value}', expected {expected}",
            details={"key": key, "value": value, "expected": expected},
            **kwargs,
        )

    @property
    def key(self) -> str:
        """The key of the malformed property."""
        return self.details["key"]

    @property
    def value(self) -> str:
        """The raw value that failed conversion."""
        return self.details["value"]


class NestedResourceError(ConfigError):
    """Raised when a nested file reference cannot be resolved or opened."""

    def __init__(self, key: str, reason: str, path: str | None = None, **kwargs: Any) -> None:
        location = f" at '{path}'" if path is not None else ""
        super().__init__(
            code="NESTED_RESOURCE_ERROR",
            message=f"Nested resource '{key}'{location}: {reason}",
            details={"key": key, "path": path, "reason": reason},
            **kwargs,
        )

    @property
    def key(self) -> str:
        """The key of the nested resource property."""
        return self.details["key"]

    @property
    def path(self) -> str | None:
        """The resolved filesystem path, if resolution got that far."""
        return self.details["path"]


class ComponentNotFoundError(ConfigError):
    """Raised when a required component has no declaration and no default."""

    def __init__(
        self,
        key: str | None,
        reason: str = "no class declared and no default given",
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="COMPONENT_NOT_FOUND",
            message=f"Could not load component for key '{key}': {reason}",
            details={"key": key, "reason": reason},
            **kwargs,
        )

    @property
    def key(self) -> str | None:
        """The component key, ``None`` for the current node."""
        return self.details["key"]


class ComponentLoadError(ConfigError):
    """Raised when a declared component class cannot be resolved or instantiated."""

    def __init__(self, key: str | None, class_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="COMPONENT_LOAD_ERROR",
            message=f"Failed to load component '{class_name}' for key '{key}': {reason}",
            details={"key": key, "class_name": class_name, "reason": reason},
            **kwargs,
        )

    @property
    def key(self) -> str | None:
        """The component key, ``None`` for the current node."""
        return self.details["key"]

    @property
    def class_name(self) -> str:
        """The declared or default class name."""
        return self.details["class_name"]


class ComponentInitError(ConfigError):
    """Raised when a component's init() fails with a non-configuration exception."""

    def __init__(self, key: str | None, class_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="COMPONENT_INIT_ERROR",
            message=f"Failed to initialize component '{class_name}' for key '{key}': {reason}",
            details={"key": key, "class_name": class_name, "reason": reason},
            **kwargs,
        )


class InvalidRegistrationError(ConfigError):
    """Raised when a component type cannot be registered."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="INVALID_REGISTRATION", message=message, **kwargs)


class BindingFileInvalidError(ConfigError):
    """Raised when a component binding file has parse errors or missing fields."""

    def __init__(self, *, file_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="BINDING_FILE_INVALID",
            message=f"Invalid binding file '{file_path}': {reason}",
            details={"file_path": file_path, "reason": reason},
            **kwargs,
        )


class ErrorCodes:
    """All error codes as constants.

    Example:
        if error.code == ErrorCodes.COMPONENT_NOT_FOUND:
            use_fallback()
    """

    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    CONFIG_NOT_PERSISTABLE = "CONFIG_NOT_PERSISTABLE"
    INVALID_KEY = "INVALID_KEY"
    PROPERTY_TYPE_ERROR = "PROPERTY_TYPE_ERROR"
    NESTED_RESOURCE_ERROR = "NESTED_RESOURCE_ERROR"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    COMPONENT_LOAD_ERROR = "COMPONENT_LOAD_ERROR"
    COMPONENT_INIT_ERROR = "COMPONENT_INIT_ERROR"
    INVALID_REGISTRATION = "INVALID_REGISTRATION"
    BINDING_FILE_INVALID = "BINDING_FILE_INVALID"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
