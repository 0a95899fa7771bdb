"""Classification of raw ``(selector, handler)`` match entries."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tagmatch.errors import MalformedPattern
from tagmatch.handle import Handle
from tagmatch.sentinels import Wildcard

Selector = Handle | str | Wildcard
Handler = Callable[[Handle], Any]


class PatternKind(Enum):
    """Pattern kinds, listed from highest to lowest dispatch priority."""

    EXACT = "exact"
    ARG_WILDCARD = "arg_wildcard"
    TAG = "tag"
    INSTANCE_WILDCARD = "instance_wildcard"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True)
class PatternInfo:
    """A classified match entry."""

    kind: PatternKind
    selector: Selector
    handler: Handler
    arg_wildcards: int = 0


def classify(pattern: Any) -> PatternInfo:
    """Classify one raw match entry.

    Raises:
        MalformedPattern: the entry is not a 2-item sequence, the handler is not callable
            or the selector is not a handle, a tag string or a wildcard marker.
    """
    if isinstance(pattern, (str, bytes)) or not isinstance(pattern, Sequence):
        raise MalformedPattern(pattern, "expected a 2-item sequence")
    if len(pattern) != 2:
        raise MalformedPattern(pattern, f"expected 2 items, got {len(pattern)}")

    selector, handler = pattern
    if not callable(handler):
        raise MalformedPattern(pattern, "handler is not callable")

    match selector:
        case Wildcard():
            kind = PatternKind.CATCH_ALL
        case Handle() if selector.is_catch_all_wildcard:
            kind = PatternKind.CATCH_ALL
        case str():
            kind = PatternKind.TAG
        case Handle() if selector.is_wildcard:
            kind = PatternKind.INSTANCE_WILDCARD
        case Handle() if selector.arg_wildcards > 0:
            return PatternInfo(PatternKind.ARG_WILDCARD, selector, handler, selector.arg_wildcards)
        case Handle():
            kind = PatternKind.EXACT
        case _:
            raise MalformedPattern(pattern, f"selector of type {type(selector).__name__} is not allowed")

    return PatternInfo(kind, selector, handler)
