"""A configurable list of strings."""

from __future__ import annotations

import logging
from typing import Iterator

from simpleconfig.component import Configurable
from simpleconfig.config import Config
from simpleconfig.registry import default_registry

logger = logging.getLogger(__name__)

__all__ = ["StringList"]


@default_registry.component()
class StringList(Configurable):
    """Strings read from the configuration and/or a nested text file.

    Example::

        <words>
            <file>words.txt</file>
            <ignore-case>true</ignore-case>
            <list>
                <string>Hello World!</string>
            </list>
        </words>

    The nested file holds one entry per line; blank lines are skipped.
    """

    KEY_FILE = "file"
    KEY_VALUES = "list.string"
    KEY_IGNORE_CASE = "ignore-case"

    def __init__(self) -> None:
        self._items: list[str] = []
        self._ignore_case = False

    def init(self, config: Config) -> None:
        self._ignore_case = config.get_boolean(self.KEY_IGNORE_CASE, False)
        items: list[str] = []
        if config.has_property(self.KEY_FILE):
            with config.get_nested_input_stream(self.KEY_FILE, encoding="utf-8") as stream:
                items.extend(line.strip() for line in stream if line.strip())
        items.extend(config.get_collection(self.KEY_VALUES) or [])
        self._items = [self._normalize(item) for item in items]
        logger.debug("Loaded %d strings", len(self._items))

    def _normalize(self, text: str) -> str:
        return text.lower() if self._ignore_case else text

    def contains(self, text: str) -> bool:
        """Check whether ``text`` is an entry of the list."""
        return self._normalize(text) in self._items

    def check_prefix(self, text: str) -> bool:
        """Check whether some entry is a prefix of ``text``."""
        normalized = self._normalize(text)
        return any(normalized.startswith(item) for item in self._items)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.contains(text)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)
