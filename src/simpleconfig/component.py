"""Component capabilities and instantiation helpers."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from simpleconfig.errors import ComponentInitError, ComponentLoadError, ConfigError

if TYPE_CHECKING:
    from simpleconfig.config import Config

__all__ = ["Configurable", "class_name_of", "instantiate", "initialize"]

T = TypeVar("T")


class Configurable(ABC):
    """Capability for components that initialize themselves from a Config.

    Implementations must be constructible without arguments. ``init`` receives
    the Config scoped to the component's own declaration.
    """

    @abstractmethod
    def init(self, config: Config) -> None:
        """Initialize the component from ``config``.

        Raises:
            ConfigError: If the configuration is missing something the
                component requires.
        """


def class_name_of(cls: type) -> str:
    """Return the fully-qualified name of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def instantiate(cls: Any, base: type[T], key: str | None, class_name: str | None = None) -> T:
    """Check ``cls`` against ``base`` and create an instance with no arguments.

    Raises:
        ComponentLoadError: If ``cls`` is not a class, is not a subclass of
            ``base``, or its constructor fails.
    """
    name = class_name or (class_name_of(cls) if inspect.isclass(cls) else repr(cls))
    if not inspect.isclass(cls):
        raise ComponentLoadError(key=key, class_name=name, reason="not a class")
    if not issubclass(cls, base):
        raise ComponentLoadError(
            key=key,
            class_name=name,
            reason=f"not a subclass of {class_name_of(base)}",
        )
    if inspect.isabstract(cls):
        raise ComponentLoadError(key=key, class_name=name, reason="class is abstract")
    try:
        return cls()
    except Exception as exc:
        raise ComponentLoadError(
            key=key, class_name=name, reason=f"instantiation failed: {exc}", cause=exc
        ) from exc


def initialize(instance: Configurable, config: Config, key: str | None) -> None:
    """Call ``instance.init(config)``.

    Configuration errors raised by the component propagate unchanged; any
    other exception is wrapped in ComponentInitError.
    """
    try:
        instance.init(config)
    except ConfigError:
        raise
    except Exception as exc:
        raise ComponentInitError(
            key=key,
            class_name=class_name_of(type(instance)),
            reason=str(exc),
            cause=exc,
        ) from exc
