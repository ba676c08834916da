"""XML-backed configuration.

Example document::

    <config>
        <test>Hello world!</test>
        <subconfig>
            <param>My value</param>
            <file>test.txt</file>
        </subconfig>
    </config>
"""

from __future__ import annotations

from pathlib import Path
from typing import IO

from lxml import etree

from simpleconfig.config import Config
from simpleconfig.document import XmlDocument
from simpleconfig.errors import ConfigNotPersistableError
from simpleconfig.keys import parse_key, select_nodes, select_values, set_value
from simpleconfig.registry import ComponentRegistry

__all__ = ["XmlConfig"]


class XmlConfig(Config):
    """Configuration over an XML document.

    A root XmlConfig wraps the document's root element. Sub-configs wrap
    nested elements of the same document and share its source file.
    """

    def __init__(
        self,
        document: XmlDocument | None = None,
        registry: ComponentRegistry | None = None,
        *,
        parent: XmlConfig | None = None,
        node: etree._Element | None = None,
    ) -> None:
        """Initialize the configuration.

        Args:
            document: Parsed document. An empty in-memory document is created
                when omitted.
            registry: Component registry. Sub-configs inherit the parent's.
            parent: Enclosing configuration, only set for sub-configs.
            node: Element this configuration is rooted at. Defaults to the
                document root.
        """
        if parent is not None:
            registry = parent.registry
            document = parent.document
        super().__init__(registry)
        self._document = document if document is not None else XmlDocument.empty()
        self._parent = parent
        self._node = node if node is not None else self._document.root

    @property
    def document(self) -> XmlDocument:
        """The document shared by this configuration and its sub-configs."""
        return self._document

    @property
    def node(self) -> etree._Element:
        """The element this configuration is rooted at."""
        return self._node

    @property
    def source(self) -> Path | None:
        return self._document.path

    @property
    def parent(self) -> XmlConfig | None:
        return self._parent

    def _values(self, key: str | None) -> list[str]:
        return select_values(self._node, key)

    def set_property(self, key: str, value: str) -> None:
        set_value(self._node, key, value)

    def get_subconfig(self, key: str) -> XmlConfig | None:
        segments = parse_key(key)
        if segments and segments[-1].attribute is not None:
            return None
        nodes = select_nodes(self._node, key)
        if len(nodes) != 1:
            return None
        return XmlConfig(parent=self, node=nodes[0])

    def save(self) -> None:
        if self._parent is not None:
            self._parent.save()
            return
        self._document.save()

    def save_to(self, output: IO[bytes]) -> None:
        if self._parent is not None:
            raise ConfigNotPersistableError(message="Only a root configuration can be written to a stream")
        self._document.write(output)

    def __repr__(self) -> str:
        return f"XmlConfig(source={self.source!s}, node={self._node.tag!r})"
