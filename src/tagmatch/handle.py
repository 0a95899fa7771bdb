"""Variant handles: immutable instantiated variants and wildcards."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Any

from tagmatch import equivalence
from tagmatch.sentinels import Wildcard

if TYPE_CHECKING:
    from tagmatch.family import Family


@dataclass(frozen=True, repr=False, eq=False)
class Handle:
    """One instantiated variant, or a wildcard over a whole family.

    Concrete handles have ``tag`` set and ``class_wildcard`` None. Class-wildcard handles
    only carry ``class_wildcard``; every other field is None.

    ``args`` is None when the variant was built without arguments, otherwise the raw
    argument tuple, where ``Wildcard.VALUE`` marks positions that match anything.

    Handles compare by identity; use ``is_`` or ``equivalent`` for variant equality.
    """

    family: Family | None = None
    tag: str | None = None
    owner: Family | None = None
    subtype: Family | None = None
    args: tuple[Any, ...] | None = None
    arg_wildcards: int = 0
    class_wildcard: Family | None = None

    def __post_init__(self) -> None:
        if self.class_wildcard is None and self.tag is None:
            raise ValueError("a concrete handle needs a tag")
        if self.class_wildcard is not None and self.tag is not None:
            raise ValueError("a class-wildcard handle carries no tag")
        limit = len(self.args) if self.args is not None else 0
        if not 0 <= self.arg_wildcards <= limit:
            raise ValueError(f"arg_wildcards={self.arg_wildcards} out of range for {limit} args")

    @classmethod
    def concrete(cls, family: Family, tag: str, owner: Family, subtype: Family | None, args: tuple[Any, ...]) -> Handle:
        wildcards = sum(1 for arg in args if arg is Wildcard.VALUE)
        return cls(
            family=family,
            tag=tag,
            owner=owner,
            subtype=subtype,
            args=args or None,
            arg_wildcards=wildcards,
        )

    @classmethod
    def wildcard_of(cls, family: Family) -> Handle:
        return cls(class_wildcard=family)

    @property
    def klass(self) -> Family:
        """Most specific family of this handle, used for lineage checks."""
        if self.class_wildcard is not None:
            return self.class_wildcard
        assert self.family is not None
        return self.subtype or self.family

    @property
    def is_wildcard(self) -> bool:
        return self.class_wildcard is not None

    @property
    def is_catch_all_wildcard(self) -> bool:
        return self.class_wildcard is not None and self.class_wildcard.is_root

    @property
    def is_variant_wildcard(self) -> bool:
        return self.is_wildcard and not self.is_catch_all_wildcard

    @property
    def key(self) -> str:
        return "_" if self.is_wildcard else (self.tag or "")

    @property
    def variant(self) -> str | None:
        return None if self.is_wildcard else self.tag

    @property
    def variant_class(self) -> Family:
        return self.klass

    @property
    def enum_class(self) -> Family | None:
        return None if self.is_wildcard else self.owner

    @cached_property
    def description(self) -> str:
        if self.class_wildcard is not None:
            return f"{self.class_wildcard.name}::_"

        assert self.owner is not None
        text = f"{self.owner.name}::{self.tag}"
        if self.args:
            shapes = ["_" if arg is Wildcard.VALUE else type(arg).__name__ for arg in self.args]
            text += f"({', '.join(shapes)})"
        return text

    def is_(self, other: Handle) -> bool:
        return equivalence.equivalent(self, other)

    def is_variant(self, tag: str | Wildcard) -> bool:
        return equivalence.is_variant(self, tag)

    def is_any_variant(self, *tags: str | Wildcard) -> bool:
        return equivalence.is_any_variant(self, *tags)

    def is_any_of(self, *others: Handle) -> bool:
        return equivalence.is_any_of(self, *others)

    def match(self, *patterns: Any) -> Any:
        from tagmatch.dispatch import dispatch

        return dispatch(self, *patterns)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        if self.args:
            values = ", ".join(repr(arg) for arg in self.args)
            return f"<Handle {self.owner.name if self.owner else '?'}::{self.tag}({values})>"
        return f"<Handle {self.description}>"


def describe(handle: Handle) -> str:
    """Render the shape of a handle: ``Family::TAG(int, str)`` or ``Family::_``."""
    return handle.description
