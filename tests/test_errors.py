"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

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


class TestConfigError:
    """Tests for error codes, messages and details."""

    def test_str_includes_code(self) -> None:
        err = ConfigError(message="broken")
        assert str(err) == "[CONFIG_INVALID] broken"
        assert err.details == {}
        assert err.cause is None
        assert err.timestamp

    def test_cause_is_kept(self) -> None:
        cause = ValueError("inner")
        err = ConfigError(message="outer", cause=cause)
        assert err.cause is cause

    @pytest.mark.parametrize(
        "err, code",
        [
            (ConfigNotFoundError(config_path="a.xml"), ErrorCodes.CONFIG_NOT_FOUND),
            (ConfigParseError(source="a.xml", reason="bad"), ErrorCodes.CONFIG_PARSE_ERROR),
            (ConfigNotPersistableError(message="no"), ErrorCodes.CONFIG_NOT_PERSISTABLE),
            (InvalidKeyError(key="a..b", reason="empty"), ErrorCodes.INVALID_KEY),
            (PropertyTypeError(key="k", value="v", expected="an integer"), ErrorCodes.PROPERTY_TYPE_ERROR),
            (NestedResourceError(key="file", reason="missing"), ErrorCodes.NESTED_RESOURCE_ERROR),
            (ComponentNotFoundError(key="c"), ErrorCodes.COMPONENT_NOT_FOUND),
            (ComponentLoadError(key="c", class_name="x.Y", reason="r"), ErrorCodes.COMPONENT_LOAD_ERROR),
            (ComponentInitError(key="c", class_name="x.Y", reason="r"), ErrorCodes.COMPONENT_INIT_ERROR),
            (InvalidRegistrationError(message="dup"), ErrorCodes.INVALID_REGISTRATION),
            (BindingFileInvalidError(file_path="b.yaml", reason="r"), ErrorCodes.BINDING_FILE_INVALID),
        ],
    )
    def test_every_error_is_a_config_error(self, err: ConfigError, code: str) -> None:
        assert isinstance(err, ConfigError)
        assert err.code == code
        assert str(err).startswith(f"[{code}]")

    def test_nested_resource_message_names_path(self) -> None:
        err = NestedResourceError(key="file", path="/tmp/x.txt", reason="file not found")
        assert "'file'" in err.message
        assert "/tmp/x.txt" in err.message

    def test_component_load_error_details(self) -> None:
        err = ComponentLoadError(key="c", class_name="x.Y", reason="not registered")
        assert err.key == "c"
        assert err.class_name == "x.Y"
        assert "x.Y" in err.message


class TestErrorCodes:
    """Tests for the immutable error code constants."""

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            ErrorCodes().CONFIG_INVALID = "other"  # type: ignore[misc]
