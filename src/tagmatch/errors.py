"""Error types for variant declaration and pattern dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tagmatch.lineage import Family


class TagMatchError(Exception):
    """Base class for all tagmatch errors."""


class MalformedPattern(TagMatchError, TypeError):
    """A match entry is not a (selector, handler) pair of the right kinds."""

    def __init__(self, pattern: Any, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(
            f"match() requires 2-item (selector, handler) pairs, where the selector is a variant "
            f"handle or a tag string and the handler is callable; {reason}: {pattern!r}"
        )


class FamilyError(TagMatchError):
    """A family declaration is invalid."""


class UnknownVariant(FamilyError, AttributeError):
    """Tag not declared anywhere in a family's lineage."""

    def __init__(self, family: Family, tag: str):
        self.family = family
        self.tag = tag
        super().__init__(f"{family.name} declares no variant {tag!r}")


class MisroutedVariant(FamilyError):
    """Tag invoked through a family that inherits it instead of the declaring one."""

    def __init__(self, family: Family, tag: str, declaring: Family):
        self.family = family
        self.tag = tag
        self.declaring = declaring
        super().__init__(
            f"{family.name}.{tag}() is invalid, please use {declaring.name}.{tag}() instead"
        )
