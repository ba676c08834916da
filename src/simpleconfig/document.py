"""XML document boundary: parsing, serialization and saving."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from lxml import etree

from simpleconfig.errors import ConfigError, ConfigNotFoundError, ConfigNotPersistableError, ConfigParseError

logger = logging.getLogger(__name__)

__all__ = ["XmlDocument", "DEFAULT_ROOT_TAG"]

DEFAULT_ROOT_TAG = "configuration"


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False, remove_comments=False)


class XmlDocument:
    """A parsed XML configuration document.

    The document owns the element tree. Config objects only hold references to
    its elements, so every wrapper derived from one document sees the same
    data.
    """

    def __init__(self, tree: etree._ElementTree, path: Path | None = None) -> None:
        self._tree = tree
        self.path = path

    @classmethod
    def empty(cls, root_tag: str = DEFAULT_ROOT_TAG) -> XmlDocument:
        """Create an in-memory document with a single empty root element."""
        return cls(etree.ElementTree(etree.Element(root_tag)))

    @classmethod
    def parse(cls, path: str | Path) -> XmlDocument:
        """Parse an XML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigParseError: If the file is not well-formed XML.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigNotFoundError(config_path=str(file_path))
        try:
            tree = etree.parse(str(file_path), parser=_parser())
        except etree.XMLSyntaxError as exc:
            raise ConfigParseError(source=str(file_path), reason=str(exc), cause=exc) from exc
        except OSError as exc:
            raise ConfigError(message=f"Cannot read configuration file {file_path}: {exc}", cause=exc) from exc
        logger.debug("Loaded configuration document from %s", file_path)
        return cls(tree, path=file_path.resolve())

    @classmethod
    def from_stream(cls, stream: IO[bytes], path: str | Path | None = None) -> XmlDocument:
        """Parse an XML document from an open stream.

        ``path`` records where the document lives, if anywhere, so that nested
        resources can be resolved and ``save()`` has a target.
        """
        source = str(path) if path is not None else "<stream>"
        try:
            tree = etree.parse(stream, parser=_parser())
        except etree.XMLSyntaxError as exc:
            raise ConfigParseError(source=source, reason=str(exc), cause=exc) from exc
        return cls(tree, path=Path(path).resolve() if path is not None else None)

    @classmethod
    def from_string(cls, text: str | bytes, path: str | Path | None = None) -> XmlDocument:
        """Parse an XML document from a string."""
        source = str(path) if path is not None else "<string>"
        if isinstance(text, str):
            text = text.encode("utf-8")
        try:
            root = etree.fromstring(text, parser=_parser())
        except etree.XMLSyntaxError as exc:
            raise ConfigParseError(source=source, reason=str(exc), cause=exc) from exc
        return cls(etree.ElementTree(root), path=Path(path).resolve() if path is not None else None)

    @property
    def root(self) -> etree._Element:
        """The root element."""
        return self._tree.getroot()

    def to_bytes(self) -> bytes:
        """Serialize the whole document."""
        return etree.tostring(self._tree, xml_declaration=True, encoding="UTF-8")

    def write(self, stream: IO[bytes]) -> None:
        """Write the whole document to a binary stream."""
        stream.write(self.to_bytes())

    def save(self) -> None:
        """Write the document back to the file it was loaded from.

        Raises:
            ConfigNotPersistableError: If the document has no file.
        """
        if self.path is None:
            raise ConfigNotPersistableError(message="Configuration was not loaded from a file and cannot be saved")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(self.to_bytes())
        logger.debug("Saved configuration document to %s", self.path)
