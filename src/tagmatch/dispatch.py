"""Priority-ordered pattern dispatch over variant handles."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from loguru import logger

from tagmatch.equivalence import equivalent, is_variant
from tagmatch.handle import Handle
from tagmatch.lineage import is_ancestor
from tagmatch.patterns import PatternInfo, PatternKind, classify

if TYPE_CHECKING:
    from tagmatch.family import Family

Matcher = Callable[[Handle], Any]


def dispatch(subject: Handle, *patterns: Any) -> Any:
    """Run ``subject`` through ``(selector, handler)`` patterns and return the winning handler's result.

    Priority:
      1. exact handles, e.g. ``User.ACTIVE("Jane")``, fired at their position in the list
      2. handles with wildcard arguments, fewest wildcards first, e.g. ``User.ACTIVE("Tim", _)``
      3. tag strings, e.g. ``User.ACTIVE``
      4. family wildcards, e.g. ``User.wildcard()``
      5. the first catch-all, ``ROOT.wildcard()`` or ``ANY``

    Returns None when nothing matches. Every entry is validated before any handler runs.
    """
    infos = [classify(pattern) for pattern in patterns]

    by_wildcards: dict[int, list[PatternInfo]] = defaultdict(list)
    tags: list[PatternInfo] = []
    wildcards: list[PatternInfo] = []
    catch_all: PatternInfo | None = None

    for info in infos:
        match info.kind:
            case PatternKind.EXACT:
                if equivalent(subject, info.selector):  # type: ignore[arg-type]
                    logger.debug("dispatch.exact_hit subject={} pattern={}", subject, info.selector)
                    return info.handler(subject)
            case PatternKind.ARG_WILDCARD:
                by_wildcards[info.arg_wildcards].append(info)
            case PatternKind.TAG:
                tags.append(info)
            case PatternKind.INSTANCE_WILDCARD:
                wildcards.append(info)
            case PatternKind.CATCH_ALL:
                if catch_all is None:
                    catch_all = info

    for count in sorted(by_wildcards):
        for info in by_wildcards[count]:
            if equivalent(subject, info.selector):  # type: ignore[arg-type]
                logger.debug("dispatch.arg_wildcard_hit subject={} wildcards={}", subject, count)
                return info.handler(subject)

    for info in tags:
        if is_variant(subject, info.selector):  # type: ignore[arg-type]
            logger.debug("dispatch.tag_hit subject={} tag={}", subject, info.selector)
            return info.handler(subject)

    for info in wildcards:
        if equivalent(subject, info.selector):  # type: ignore[arg-type]
            logger.debug("dispatch.wildcard_hit subject={} pattern={}", subject, info.selector)
            return info.handler(subject)

    if catch_all is not None:
        logger.debug("dispatch.catch_all subject={}", subject)
        return catch_all.handler(subject)

    logger.debug("dispatch.no_match subject={} patterns={}", subject, len(infos))
    return None


def belongs_to(subject: Handle, family: Family) -> bool:
    return family.is_root or is_ancestor(family, subject.klass)


def build_matcher(family: Family, *patterns: Any) -> Matcher:
    """Build a reusable matcher scoped on ``family``.

    The matcher returns None, without looking at any pattern, for handles outside
    ``family``'s lineage; a matcher scoped on the root family accepts every handle.
    Patterns are validated here, so a malformed entry fails at build time.
    """
    for pattern in patterns:
        classify(pattern)

    def matcher(subject: Handle) -> Any:
        if not isinstance(subject, Handle) or not belongs_to(subject, family):
            logger.debug("matcher.out_of_scope family={} subject={!r}", family.name, subject)
            return None
        return dispatch(subject, *patterns)

    return matcher
