"""Family hierarchy queries and the lineage resolution cache."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from loguru import logger

from tagmatch.errors import UnknownVariant

if TYPE_CHECKING:
    from tagmatch.family import Family

Lineage = tuple["Family", "Family | None"]


def ancestors(family: Family) -> Iterator[Family]:
    """Yield ``family`` and then each parent up to the root."""
    current: Family | None = family
    while current is not None:
        yield current
        current = current.parent


def is_ancestor(ancestor: Family, family: Family) -> bool:
    """Return True when ``ancestor`` is ``family`` or one of its parents."""
    return any(candidate is ancestor for candidate in ancestors(family))


def compatible(a: Family, b: Family) -> bool:
    """Two families are comparable when one sits on the other's lineage."""
    return a is b or is_ancestor(a, b) or is_ancestor(b, a)


class LineageCache:
    """Memo of ``(owner, tag) -> (declaring family, subtype)``.

    Entries never change once written, so concurrent writers may race freely.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: dict[tuple[Family, str], Lineage] = {}

    def get(self, owner: Family, tag: str) -> Lineage | None:
        if not self.enabled:
            return None
        return self._entries.get((owner, tag))

    def put(self, owner: Family, tag: str, lineage: Lineage) -> None:
        if self.enabled:
            self._entries.setdefault((owner, tag), lineage)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def resolve_lineage(owner: Family, tag: str, cache: LineageCache | None = None) -> Lineage:
    """Find the family declaring ``tag`` as seen from ``owner``, and the tag's subtype if any.

    Raises:
        UnknownVariant: no family in ``owner``'s lineage declares ``tag``.
    """
    if cache is not None:
        hit = cache.get(owner, tag)
        if hit is not None:
            return hit

    for family in ancestors(owner):
        if tag in family.variants:
            resolved = (family, family.variants[tag])
            break
    else:
        raise UnknownVariant(owner, tag)

    logger.debug("lineage.resolved owner={} tag={} declaring={}", owner.name, tag, resolved[0].name)
    if cache is not None:
        cache.put(owner, tag, resolved)
    return resolved
