"""Reusable configurable components."""

from __future__ import annotations

from simpleconfig.utils.string_list import StringList

__all__ = ["StringList"]
