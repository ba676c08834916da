"""Abstract configuration contract and component resolution."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Annotated, Any, TypeVar

import yaml
from pydantic import BeforeValidator, TypeAdapter, ValidationError

from simpleconfig.component import Configurable, class_name_of, initialize, instantiate
from simpleconfig.errors import ComponentLoadError, ComponentNotFoundError, NestedResourceError, PropertyTypeError
from simpleconfig.keys import attribute_key
from simpleconfig.registry import ComponentRegistry, default_registry

logger = logging.getLogger(__name__)

__all__ = ["Config", "CLASS_ATTRIBUTE"]

CLASS_ATTRIBUTE = "class"

T = TypeVar("T")
C = TypeVar("C", bound=Configurable)

_INTEGER_TEXT = re.compile(r"[+-]?\d+", re.ASCII)


def _integer_text(value: Any) -> Any:
    if isinstance(value, str) and not _INTEGER_TEXT.fullmatch(value):
        raise ValueError("not a decimal integer")
    return value


_BOOL_ADAPTER = TypeAdapter(bool)
_INT_ADAPTER = TypeAdapter(Annotated[int, BeforeValidator(_integer_text)])
_FLOAT_ADAPTER = TypeAdapter(float)


class Config(ABC):
    """A node in a hierarchical configuration tree.

    Provides properties, sub-configurations, nested file resources and
    components. Keys are always relative to this node.
    """

    def __init__(self, registry: ComponentRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry

    @property
    def registry(self) -> ComponentRegistry:
        """The registry used to resolve ``class`` attributes."""
        return self._registry

    @property
    @abstractmethod
    def source(self) -> Path | None:
        """The file the configuration was loaded from, shared by all sub-configs."""

    @property
    @abstractmethod
    def parent(self) -> Config | None:
        """The enclosing configuration, ``None`` for the root."""

    # ----- Persistence -----

    @abstractmethod
    def save(self) -> None:
        """Persist the whole configuration to its source file."""

    @abstractmethod
    def save_to(self, output: IO[bytes]) -> None:
        """Write the whole configuration to ``output``."""

    # ----- Properties -----

    @abstractmethod
    def _values(self, key: str | None) -> list[str]:
        """Return every value addressed by ``key`` in document order."""

    @abstractmethod
    def set_property(self, key: str, value: str) -> None:
        """Set or create the property ``key``. Not persisted until saved."""

    @abstractmethod
    def get_subconfig(self, key: str) -> Config | None:
        """Return the sub-configuration at ``key``.

        Returns None unless ``key`` addresses exactly one element.
        """

    def get_property(self, key: str | None, default: str | None = None) -> str | None:
        """Return the single value at ``key``, or ``default``.

        Keys that resolve to nothing or to several values give ``default``.
        """
        values = self._values(key)
        if len(values) != 1:
            return default
        return values[0]

    def has_property(self, key: str) -> bool:
        """Check whether ``key`` resolves to at least one value."""
        return bool(self._values(key))

    def get_collection(self, key: str) -> list[str] | None:
        """Return all values at ``key`` in document order.

        Example::

            <list>
                <string>data 1</string>
                <string>data 2</string>
            </list>

        ``get_collection("list.string")`` returns ``["data 1", "data 2"]``.
        Returns None if the key has no values.
        """
        values = self._values(key)
        return values or None

    def _convert(self, key: str, adapter: TypeAdapter[Any], expected: str, default: Any) -> Any:
        raw = self.get_property(key)
        if raw is None:
            return default
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            raise PropertyTypeError(key=key, value=raw, expected=expected, cause=exc) from exc

    def get_boolean(self, key: str, default: bool) -> bool:
        """Return the boolean at ``key``, or ``default`` if it is not defined.

        Raises:
            PropertyTypeError: If the value is present but not a boolean.
        """
        return self._convert(key, _BOOL_ADAPTER, "a boolean", default)

    def get_int(self, key: str, default: int) -> int:
        """Return the integer at ``key``, or ``default`` if it is not defined.

        Raises:
            PropertyTypeError: If the value is present but not an integer.
        """
        return self._convert(key, _INT_ADAPTER, "an integer", default)

    def get_float(self, key: str, default: float) -> float:
        """Return the float at ``key``, or ``default`` if it is not defined."""
        return self._convert(key, _FLOAT_ADAPTER, "a number", default)

    # ----- Nested resources -----

    def _resolve_nested(self, key: str) -> Path:
        value = self.get_property(key)
        if value is None:
            raise NestedResourceError(key=key, reason="property is not defined")
        path = Path(value)
        if not path.is_absolute():
            if self.source is None:
                raise NestedResourceError(
                    key=key,
                    path=value,
                    reason="relative path but the configuration has no source file",
                )
            path = self.source.parent / path
        return path

    def _ensure_parent(self, key: str, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise NestedResourceError(
                key=key, path=str(path), reason=f"cannot create directory: {exc}", cause=exc
            ) from exc

    def get_nested_path(self, key: str) -> Path:
        """Return the absolute path named by the property ``key``.

        Relative paths resolve against the directory of the source file.
        Missing parent directories are created.
        """
        path = self._resolve_nested(key)
        self._ensure_parent(key, path)
        logger.debug("Nested path '%s' resolved to %s", key, path)
        return path.absolute()

    def get_nested_input_stream(self, key: str, encoding: str | None = None) -> IO[Any]:
        """Open the nested file named by ``key`` for reading.

        The stream is binary unless ``encoding`` is given. The caller must
        close it.

        Raises:
            NestedResourceError: If the property is missing or the file cannot
                be opened.
        """
        path = self._resolve_nested(key)
        try:
            if encoding is None:
                return path.open("rb")
            return path.open("r", encoding=encoding)
        except OSError as exc:
            raise NestedResourceError(key=key, path=str(path), reason="file not found", cause=exc) from exc

    def get_nested_output_stream(self, key: str, encoding: str | None = None) -> IO[Any]:
        """Open the nested file named by ``key`` for writing.

        Missing parent directories are created first. The caller must close
        the stream.
        """
        path = self._resolve_nested(key)
        self._ensure_parent(key, path)
        try:
            if encoding is None:
                return path.open("wb")
            return path.open("w", encoding=encoding)
        except OSError as exc:
            raise NestedResourceError(
                key=key, path=str(path), reason=f"cannot open for writing: {exc}", cause=exc
            ) from exc

    def read_nested_object(self, key: str) -> Any:
        """Load the YAML document stored in the nested file ``key``."""
        with self.get_nested_input_stream(key) as stream:
            try:
                return yaml.safe_load(stream)
            except yaml.YAMLError as exc:
                raise NestedResourceError(key=key, reason=f"invalid YAML: {exc}", cause=exc) from exc

    # ----- Components -----

    def has_custom_class(self, key: str | None) -> bool:
        """Check whether the node at ``key`` declares a ``class`` attribute."""
        return self.get_property(attribute_key(key, CLASS_ATTRIBUTE)) is not None

    def has_component(self, key: str) -> bool:
        """Check whether a declaration block exists at ``key``."""
        return self.get_subconfig(key) is not None

    def _declared_component(self, key: str | None, base: type[T]) -> T:
        class_name = self.get_property(attribute_key(key, CLASS_ATTRIBUTE))
        if class_name is None:
            raise ComponentNotFoundError(key=key)
        cls = self._registry.resolve(class_name, key=key)
        logger.debug("Component '%s' resolved to declared class %s", key, class_name)
        return instantiate(cls, base, key, class_name=class_name)

    def _default_component(self, key: str | None, base: type[T], default: type[T]) -> T:
        logger.debug("Component '%s' uses default %s", key, class_name_of(default))
        return instantiate(default, base, key)

    def get_component(self, key: str | None, base: type[T], default: type[T] | None = None) -> T:
        """Create the component declared at ``key``.

        The class named by the ``class`` attribute wins. Without one,
        ``default`` is instantiated. ``key=None`` looks at this node's own
        ``class`` attribute.

        Args:
            key: Key of the component node, or None for this node.
            base: Class the component must derive from.
            default: Implementation used when no class is declared.

        Raises:
            ComponentNotFoundError: If no class is declared and no default is given.
            ComponentLoadError: If the class is unknown, incompatible or fails
                to instantiate.
        """
        if self.has_custom_class(key):
            return self._declared_component(key, base)
        if default is None:
            raise ComponentNotFoundError(key=key)
        return self._default_component(key, base, default)

    def get_component_and_init(self, key: str | None, base: type[C], default: type[C] | None = None) -> C:
        """Create the component declared at ``key`` and initialize it.

        The component is initialized with the sub-configuration at ``key``
        (or with this configuration when ``key`` is None), so ``base`` must
        be a :class:`Configurable`.

        Raises:
            ComponentNotFoundError: If no sub-configuration exists at ``key``,
                or no class is declared and no default is given.
            ComponentLoadError: If resolution or instantiation fails.
            ConfigError: Raised by the component's own ``init``.
        """
        if not (isinstance(base, type) and issubclass(base, Configurable)):
            raise ComponentLoadError(
                key=key,
                class_name=getattr(base, "__qualname__", repr(base)),
                reason="base type does not implement Configurable",
            )

        if key is None:
            instance = self.get_component(None, base, default)
            initialize(instance, self, key)
            return instance

        if self.has_custom_class(key):
            sub = self.get_subconfig(key)
            if sub is None:
                raise ComponentNotFoundError(key=key, reason="no unique configuration block")
            return sub.get_component_and_init(None, base)

        sub = self.get_subconfig(key)
        if sub is None:
            raise ComponentNotFoundError(key=key, reason="no configuration block")
        if default is None:
            raise ComponentNotFoundError(key=key)
        instance = self._default_component(key, base, default)
        initialize(instance, sub, key)
        return instance
