"""
Ordered query parameter set with last-write-wins replacement.

Setting a name that is already present replaces its value but keeps the
position where the name was first introduced, so the produced query string
is deterministic and never carries duplicate names.

Pairs parsed from an existing query string keep their original encoded
text and are emitted untouched unless a later ``set`` replaces them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger("jsonapi_router.parameters")

# Emitted literally: brackets and commas are part of the wire convention,
# "+" is the ascending sort prefix.
_SAFE_CHARS = "[],+:/"


class QueryParameters:
    """Insertion-ordered ``name -> value`` mapping for a URL query string."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        # decoded name -> (decoded value, original encoded pair or None)
        self._items: dict[str, tuple[str, str | None]] = {}
        for name, value in items:
            self.set(name, value)

    @classmethod
    def parse(cls, query_string: str) -> QueryParameters:
        """
        Seed from an existing query string.

        Names and values are decoded only to match and read them; ``+`` is
        kept as a literal plus sign. Each pair is encoded again exactly as
        it was given.
        """
        params = cls()
        for part in query_string.split("&"):
            if not part:
                continue
            name, _, value = part.partition("=")
            params._items[unquote(name)] = (unquote(value), part)
        return params

    def set(self, name: str, value: str) -> None:
        """Set *name* to *value*, replacing any earlier value in place."""
        current = self._items.get(name)
        if current is not None and current[0] != value:
            logger.debug(
                "Query parameter %s overridden (%r -> %r)",
                name,
                current[0],
                value,
            )
        self._items[name] = (value, None)

    def get(self, name: str) -> str | None:
        current = self._items.get(name)
        return current[0] if current is not None else None

    def items(self) -> list[tuple[str, str]]:
        return [(name, value) for name, (value, _) in self._items.items()]

    def encode(self) -> str:
        """Render as ``name=value&...`` with the convention's literal characters."""
        return "&".join(
            raw
            if raw is not None
            else f"{quote(name, safe=_SAFE_CHARS)}={quote(value, safe=_SAFE_CHARS)}"
            for name, (value, raw) in self._items.items()
        )

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"QueryParameters({self.items()!r})"
