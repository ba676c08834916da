"""Shared test fixtures for the simpleconfig test suite."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

import pytest

from simpleconfig import ComponentRegistry, XmlConfig, from_file

from components import (
    BrokenConstructorComponent,
    ExplodingComponent,
    ExtendedComponent,
    FastService,
    NotAComponent,
    RequiresPortComponent,
    SimpleComponent,
)

RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture
def registry() -> ComponentRegistry:
    """Registry with the example components under short names."""
    reg = ComponentRegistry()
    reg.register(SimpleComponent, name="example.SimpleComponent")
    reg.register(ExtendedComponent, name="example.ExtendedComponent")
    reg.register(NotAComponent, name="example.NotAComponent")
    reg.register(BrokenConstructorComponent, name="example.BrokenConstructorComponent")
    reg.register(RequiresPortComponent, name="example.RequiresPortComponent")
    reg.register(ExplodingComponent, name="example.ExplodingComponent")
    reg.register(FastService, name="example.FastService")
    return reg


@pytest.fixture
def resources(tmp_path: Path) -> Path:
    """A private copy of the resource directory, safe to modify."""
    target = tmp_path / "resources"
    shutil.copytree(RESOURCES_DIR, target)
    return target


@pytest.fixture
def load(resources: Path, registry: ComponentRegistry) -> Callable[[str], XmlConfig]:
    """Load a resource document with the example registry."""

    def _load(name: str) -> XmlConfig:
        return from_file(resources / name, registry=registry)

    return _load
