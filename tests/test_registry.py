"""Tests for the component registry and YAML binding files."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from simpleconfig import (
    BindingFileInvalidError,
    ComponentLoadError,
    ComponentRegistry,
    InvalidRegistrationError,
    from_string,
)

from components import ExtendedComponent, PlainService, SimpleComponent


class TestRegistration:
    """Tests for register, unregister, get, has and the decorator form."""

    def test_register_default_name(self) -> None:
        reg = ComponentRegistry()
        name = reg.register(SimpleComponent)
        assert name == f"{SimpleComponent.__module__}.SimpleComponent"
        assert reg.get(name) is SimpleComponent

    def test_register_explicit_name(self) -> None:
        reg = ComponentRegistry()
        reg.register(SimpleComponent, name="simple")
        assert reg.has("simple")
        assert reg.resolve("simple") is SimpleComponent

    def test_reregistering_same_class_is_allowed(self) -> None:
        reg = ComponentRegistry()
        reg.register(SimpleComponent, name="simple")
        reg.register(SimpleComponent, name="simple")
        assert reg.count == 1

    def test_duplicate_name_raises(self) -> None:
        reg = ComponentRegistry()
        reg.register(SimpleComponent, name="simple")
        with pytest.raises(InvalidRegistrationError):
            reg.register(ExtendedComponent, name="simple")

    def test_register_non_class_raises(self) -> None:
        reg = ComponentRegistry()
        with pytest.raises(InvalidRegistrationError):
            reg.register(SimpleComponent(), name="instance")  # type: ignore[arg-type]

    def test_register_empty_name_raises(self) -> None:
        reg = ComponentRegistry()
        with pytest.raises(InvalidRegistrationError):
            reg.register(SimpleComponent, name="")

    def test_decorator(self) -> None:
        reg = ComponentRegistry()

        @reg.component("decorated")
        class Decorated(PlainService):
            pass

        assert reg.get("decorated") is Decorated

    def test_unregister(self) -> None:
        reg = ComponentRegistry()
        reg.register(SimpleComponent, name="simple")
        assert reg.unregister("simple") is True
        assert reg.unregister("simple") is False
        assert reg.get("simple") is None

    def test_names_and_iter(self) -> None:
        reg = ComponentRegistry()
        reg.register(SimpleComponent, name="b")
        reg.register(ExtendedComponent, name="a")
        assert reg.names == ["a", "b"]
        assert dict(reg.iter()) == {"a": ExtendedComponent, "b": SimpleComponent}

    def test_resolve_unknown_raises(self) -> None:
        with pytest.raises(ComponentLoadError):
            ComponentRegistry().resolve("missing")

    def test_concurrent_registration(self) -> None:
        reg = ComponentRegistry()

        def worker(index: int) -> None:
            reg.register(SimpleComponent, name=f"simple-{index}")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert reg.count == 20


class TestRegistryScope:
    """Tests that class attributes only resolve through the registry."""

    def test_class_names_are_resolved_only_through_the_registry(self) -> None:
        """A fully-qualified class name is not imported unless it is registered."""
        config = from_string(
            '<config><c class="components.SimpleComponent"/></config>',
            registry=ComponentRegistry(),
        )
        with pytest.raises(ComponentLoadError):
            config.get_component_and_init("c", SimpleComponent)

    def test_registered_fully_qualified_name(self) -> None:
        reg = ComponentRegistry()
        name = reg.register(SimpleComponent)
        config = from_string(f'<config><c class="{name}"><name>fq</name></c></config>', registry=reg)
        assert config.get_component_and_init("c", SimpleComponent).name == "fq"


class TestBindings:
    """Tests for loading component bindings from YAML files."""

    def test_load_bindings(self, tmp_path: Path) -> None:
        f = tmp_path / "components.yaml"
        f.write_text(
            "components:\n"
            "  - name: simple\n"
            "    target: components:SimpleComponent\n"
            "  - target: components:ExtendedComponent\n"
        )
        reg = ComponentRegistry()
        assert reg.load_bindings(f) == 2
        assert reg.get("simple") is SimpleComponent
        assert reg.get(f"{ExtendedComponent.__module__}.ExtendedComponent") is ExtendedComponent

    def test_bindings_drive_component_resolution(self, tmp_path: Path) -> None:
        f = tmp_path / "components.yaml"
        f.write_text("components:\n  - name: ext\n    target: components:ExtendedComponent\n")
        reg = ComponentRegistry()
        reg.load_bindings(str(f))
        config = from_string(
            '<config><c class="ext"><extended>yes</extended></c></config>',
            registry=reg,
        )
        component = config.get_component_and_init("c", SimpleComponent)
        assert isinstance(component, ExtendedComponent)
        assert component.extended_info == "yes"

    def test_empty_list(self, tmp_path: Path) -> None:
        f = tmp_path / "components.yaml"
        f.write_text("components: []\n")
        assert ComponentRegistry().load_bindings(f) == 0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(BindingFileInvalidError):
            ComponentRegistry().load_bindings(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "{{invalid yaml:",
            "other: 1\n",
            "components: not-a-list\n",
            "components:\n  - name: no-target\n",
        ],
    )
    def test_invalid_files(self, tmp_path: Path, content: str) -> None:
        f = tmp_path / "components.yaml"
        f.write_text(content)
        with pytest.raises(BindingFileInvalidError):
            ComponentRegistry().load_bindings(f)

    @pytest.mark.parametrize(
        "target",
        [
            "components.SimpleComponent",
            "no_such_module_xyz:Thing",
            "components:Missing",
            "components:SimpleComponent.KEY_NAME",
        ],
    )
    def test_invalid_targets(self, target: str) -> None:
        with pytest.raises(ComponentLoadError):
            ComponentRegistry.resolve_target(target)
