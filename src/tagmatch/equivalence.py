"""Structural equivalence between variant handles.

``equivalent`` is the general "is" predicate. It is decomposed into:

- ``same_variant``: do both handles name the same tag on a shared lineage (wildcards aware)?
- ``looks_like``: can the answer be decided without looking at arguments? (True/False/None)
- ``same_args``: positional argument comparison honouring value wildcards.

A family may install its own rule (see ``Family.equivalence``); such rules should start from
``looks_like`` and only replace the argument comparison.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tagmatch.lineage import ancestors, compatible
from tagmatch.sentinels import Wildcard

if TYPE_CHECKING:
    from tagmatch.handle import Handle

EquivalenceRule = Callable[["Handle", "Handle"], bool]

# Values of these types are compared strictly: same type and equal.
PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)


def same_variant(a: Handle, b: Handle) -> bool:
    if a is b:
        return True

    if a.is_wildcard or b.is_wildcard:
        return a.is_catch_all_wildcard or b.is_catch_all_wildcard or compatible(a.klass, b.klass)

    return compatible(a.klass, b.klass) and a.tag == b.tag


def looks_like(a: Handle, b: Handle) -> bool | None:
    """Decide equivalence from variants and wildcards alone, or return None.

    None means both handles carry arguments that need a position-by-position comparison.
    """
    if not same_variant(a, b):
        return False

    if a.is_wildcard or b.is_wildcard:
        return True

    a_count = len(a.args) if a.args is not None else 0
    b_count = len(b.args) if b.args is not None else 0
    if a_count == b_count and (a.arg_wildcards == a_count or b.arg_wildcards == b_count):
        return True

    return None


def _same_value(x: object, y: object) -> bool:
    if x is y:
        return True
    if isinstance(x, PRIMITIVE_TYPES) or isinstance(y, PRIMITIVE_TYPES):
        return type(x) is type(y) and x == y
    return bool(x == y)


def same_args(a: Handle, b: Handle) -> bool:
    if a.args is None or b.args is None:
        return a.args is None and b.args is None

    if len(a.args) != len(b.args):
        return False

    for x, y in zip(a.args, b.args):
        if x is Wildcard.VALUE or y is Wildcard.VALUE:
            continue
        if not _same_value(x, y):
            return False

    return True


def default_equivalent(a: Handle, b: Handle) -> bool:
    decided = looks_like(a, b)
    if decided is not None:
        return decided
    return same_args(a, b)


def rule_for(handle: Handle) -> EquivalenceRule | None:
    """Nearest custom equivalence rule on a concrete handle's lineage."""
    if handle.is_wildcard:
        return None
    for family in ancestors(handle.klass):
        if family.custom_equivalence is not None:
            return family.custom_equivalence
    return None


def equivalent(a: Handle, b: Handle) -> bool:
    rule = rule_for(a)
    if rule is not None:
        return rule(a, b)
    return default_equivalent(a, b)


def is_variant(handle: Handle, tag: str | Wildcard) -> bool:
    if isinstance(tag, Wildcard):
        return True
    return handle.tag is not None and handle.tag == tag


def is_any_variant(handle: Handle, *tags: str | Wildcard) -> bool:
    return any(is_variant(handle, tag) for tag in tags)


def is_any_of(handle: Handle, *others: Handle) -> bool:
    return any(equivalent(handle, other) for other in others)
