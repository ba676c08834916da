"""Registry of component types that configuration files may name."""

from __future__ import annotations

import importlib
import inspect
import logging
import pathlib
import threading
from typing import Any, Callable, Iterator, TypeVar

import yaml

from simpleconfig.component import class_name_of
from simpleconfig.errors import BindingFileInvalidError, ComponentLoadError, InvalidRegistrationError

logger = logging.getLogger(__name__)

__all__ = ["ComponentRegistry", "default_registry"]

C = TypeVar("C", bound=type)


class ComponentRegistry:
    """Maps declared type identifiers to component classes.

    A ``class`` attribute in a configuration document is only honoured if the
    name has been registered here, either in code or through a binding file.
    Nothing is imported on the strength of the document alone.
    """

    def __init__(self) -> None:
        self._components: dict[str, type] = {}
        self._lock = threading.RLock()

    # ----- Registration -----

    def register(self, cls: type, name: str | None = None) -> str:
        """Register a component class.

        Args:
            cls: The component class.
            name: Identifier used in ``class`` attributes. Defaults to the
                fully-qualified class name.

        Returns:
            The identifier the class was registered under.

        Raises:
            InvalidRegistrationError: If ``cls`` is not a class or the name is
                empty or already taken by a different class.
        """
        if not inspect.isclass(cls):
            raise InvalidRegistrationError(message=f"Component must be a class, got {cls!r}")
        component_name = name if name is not None else class_name_of(cls)
        if not component_name:
            raise InvalidRegistrationError(message="Component name must be a non-empty string")

        with self._lock:
            existing = self._components.get(component_name)
            if existing is not None and existing is not cls:
                raise InvalidRegistrationError(message=f"Component already registered: {component_name}")
            self._components[component_name] = cls
        logger.debug("Registered component '%s' -> %s", component_name, class_name_of(cls))
        return component_name

    def component(self, name: str | None = None) -> Callable[[C], C]:
        """Class decorator form of :meth:`register`."""

        def decorator(cls: C) -> C:
            self.register(cls, name=name)
            return cls

        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a component. Returns False if it was not registered."""
        with self._lock:
            return self._components.pop(name, None) is not None

    # ----- Queries -----

    def get(self, name: str) -> type | None:
        """Look up a component class by name. Returns None if not found."""
        with self._lock:
            return self._components.get(name)

    def has(self, name: str) -> bool:
        """Check whether a name is registered."""
        with self._lock:
            return name in self._components

    def resolve(self, name: str, key: str | None = None) -> type:
        """Look up a component class, failing if it is unknown.

        Raises:
            ComponentLoadError: If no class is registered under ``name``.
        """
        cls = self.get(name)
        if cls is None:
            raise ComponentLoadError(key=key, class_name=name, reason="component type is not registered")
        return cls

    def iter(self) -> Iterator[tuple[str, type]]:
        """Return an iterator of (name, class) tuples (snapshot-based)."""
        with self._lock:
            items = list(self._components.items())
        return iter(items)

    @property
    def names(self) -> list[str]:
        """Sorted list of registered names."""
        with self._lock:
            return sorted(self._components)

    @property
    def count(self) -> int:
        """Number of registered components."""
        with self._lock:
            return len(self._components)

    # ----- Binding files -----

    def load_bindings(self, file_path: str | pathlib.Path) -> int:
        """Register the components listed in a YAML binding file.

        The file has the form::

            components:
              - name: storage.local
                target: myapp.storage:LocalStorage
              - target: myapp.storage:S3Storage

        Entries without ``name`` are registered under the class's
        fully-qualified name.

        Returns:
            Number of components registered from the file.
        """
        path = pathlib.Path(file_path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise BindingFileInvalidError(file_path=str(file_path), reason=str(exc), cause=exc) from exc

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise BindingFileInvalidError(
                file_path=str(file_path), reason=f"YAML parse error: {exc}", cause=exc
            ) from exc

        if data is None:
            raise BindingFileInvalidError(file_path=str(file_path), reason="File is empty")
        if not isinstance(data, dict) or "components" not in data:
            raise BindingFileInvalidError(file_path=str(file_path), reason="Missing 'components' key")

        entries = data["components"]
        if not isinstance(entries, list):
            raise BindingFileInvalidError(file_path=str(file_path), reason="'components' must be a list")

        registered = 0
        for entry in entries:
            if not isinstance(entry, dict) or "target" not in entry:
                raise BindingFileInvalidError(file_path=str(file_path), reason="Component entry missing 'target'")
            cls = self.resolve_target(entry["target"])
            self.register(cls, name=entry.get("name"))
            registered += 1

        if registered == 0:
            logger.warning("Binding file %s lists no components", path)
        return registered

    @staticmethod
    def resolve_target(target: str) -> type:
        """Resolve ``'package.module:ClassName'`` to the class it names."""
        if ":" not in target:
            raise ComponentLoadError(
                key=None,
                class_name=target,
                reason="expected format 'module.path:ClassName'",
            )

        module_path, class_name = target.split(":", 1)
        try:
            mod = importlib.import_module(module_path)
        except ImportError as exc:
            raise ComponentLoadError(
                key=None, class_name=target, reason=f"cannot import module '{module_path}'", cause=exc
            ) from exc

        result: Any = mod
        for part in class_name.split("."):
            try:
                result = getattr(result, part)
            except AttributeError as exc:
                raise ComponentLoadError(
                    key=None,
                    class_name=target,
                    reason=f"'{class_name}' not found in module '{module_path}'",
                    cause=exc,
                ) from exc

        if not inspect.isclass(result):
            raise ComponentLoadError(key=None, class_name=target, reason="target is not a class")
        return result


default_registry = ComponentRegistry()
