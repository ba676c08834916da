"""Key path parsing and resolution against XML element trees.

A key is a dot-separated list of segments::

    database.connection(1).host
    subconfig.something-else[@attr]
    [@class]

Each segment names a child element. ``name(i)`` picks the i-th node (zero
based) among those matched at that step, and a trailing ``[@attr]`` selects an
attribute instead of element text. ``None`` and ``""`` address the node the
key is evaluated against.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lxml import etree

from simpleconfig.errors import InvalidKeyError

__all__ = [
    "KeySegment",
    "parse_key",
    "attribute_key",
    "select_nodes",
    "select_values",
    "element_value",
    "set_value",
]

_SEGMENT_PATTERN = re.compile(
    r"^(?P<name>[^.\[\]()@\s]+)?"
    r"(?:\((?P<index>\d+)\))?"
    r"(?:\[@(?P<attribute>[^\[\]@\s]+)\])?$"
)


@dataclass(frozen=True)
class KeySegment:
    """One parsed step of a key path."""

    name: str | None
    index: int | None = None
    attribute: str | None = None


def _split(key: str) -> list[str]:
    """Split on dots that are not inside an attribute selector."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in key:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == "." and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def parse_key(key: str | None) -> list[KeySegment]:
    """Parse a key into segments.

    Raises:
        InvalidKeyError: If a segment is empty or malformed, or an attribute
            selector appears before the last segment.
    """
    if not key:
        return []

    raw_parts = _split(key)
    segments: list[KeySegment] = []
    for position, part in enumerate(raw_parts):
        match = _SEGMENT_PATTERN.match(part)
        if not part or match is None:
            raise InvalidKeyError(key=key, reason=f"malformed segment '{part}'")
        name = match.group("name")
        index = match.group("index")
        attribute = match.group("attribute")
        if name is None and (index is not None or attribute is None):
            raise InvalidKeyError(key=key, reason=f"segment '{part}' has no element name")
        if attribute is not None and position != len(raw_parts) - 1:
            raise InvalidKeyError(key=key, reason="attribute selector must be the last segment")
        segments.append(
            KeySegment(
                name=name,
                index=int(index) if index is not None else None,
                attribute=attribute,
            )
        )
    return segments


def attribute_key(key: str | None, attribute: str) -> str:
    """Build the key of ``attribute`` on the node addressed by ``key``."""
    if not key:
        return f"[@{attribute}]"
    return f"{key}[@{attribute}]"


def _local_name(element: etree._Element) -> str | None:
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in element if _local_name(child) == name]


def _walk(node: etree._Element, segments: list[KeySegment]) -> list[etree._Element]:
    nodes = [node]
    for segment in segments:
        if segment.name is None:
            continue
        matched = [child for parent in nodes for child in _children(parent, segment.name)]
        if segment.index is not None:
            matched = matched[segment.index : segment.index + 1]
        nodes = matched
        if not nodes:
            break
    return nodes


def _attribute_of(segments: list[KeySegment]) -> str | None:
    return segments[-1].attribute if segments else None


def select_nodes(node: etree._Element, key: str | None) -> list[etree._Element]:
    """Return the elements addressed by ``key``, ignoring any attribute selector."""
    return _walk(node, parse_key(key))


def element_value(element: etree._Element) -> str | None:
    """Return the textual value of an element.

    Grouping elements (child elements and no text of their own) have no value.
    An empty leaf element holds the empty string.
    """
    text = (element.text or "").strip()
    if text:
        return text
    if any(isinstance(child.tag, str) for child in element):
        return None
    return ""


def select_values(node: etree._Element, key: str | None) -> list[str]:
    """Return every value addressed by ``key`` in document order."""
    segments = parse_key(key)
    nodes = _walk(node, segments)
    attribute = _attribute_of(segments)
    if attribute is not None:
        return [n.get(attribute) for n in nodes if n.get(attribute) is not None]
    values = [element_value(n) for n in nodes]
    return [value for value in values if value is not None]


def set_value(node: etree._Element, key: str | None, value: str) -> None:
    """Create or overwrite the value at ``key``.

    The first node the key resolves to is updated; other matches are dropped
    so that the key resolves to exactly ``value`` afterwards. When nothing
    matches, missing elements are created below the deepest existing match.
    """
    segments = parse_key(key)
    attribute = _attribute_of(segments)
    previous = _walk(node, segments)

    if previous:
        target = previous[0]
    else:
        target = _create_path(node, segments)

    if attribute is not None:
        target.set(attribute, value)
    else:
        target.text = value

    for other in previous[1:]:
        if attribute is not None:
            other.attrib.pop(attribute, None)
        elif other.getparent() is not None:
            other.getparent().remove(other)


def _create_path(node: etree._Element, segments: list[KeySegment]) -> etree._Element:
    nodes = [node]
    for segment in segments:
        if segment.name is None:
            continue
        matched = [child for parent in nodes for child in _children(parent, segment.name)]
        if segment.index is not None:
            matched = matched[segment.index : segment.index + 1]
        nodes = matched or [etree.SubElement(nodes[0], segment.name)]
    return nodes[0]
