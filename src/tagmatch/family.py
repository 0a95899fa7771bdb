"""Variant families and the registry holding their hierarchy.

A family is declared once with its variant tags::

    registry = FamilyRegistry()
    User = registry.family("User", ["NOT_ACTIVE", "ACTIVE", "PENDING"])

    jane = User.ACTIVE("Jane")          # concrete handle
    anyone = User.ACTIVE(_)             # wildcard argument
    users = User.wildcard()             # any User variant
    assert jane.is_(anyone) and jane.is_(users)

Variants may be realized as sub-types: a mapping ``tag -> subtype name`` creates a child
family per tag, so ``Post.PRODUCT(...)`` handles also satisfy ``ProductPost.wildcard()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from tagmatch.config import TagMatchSettings, load_settings
from tagmatch.equivalence import EquivalenceRule
from tagmatch.errors import FamilyError, MisroutedVariant
from tagmatch.handle import Handle
from tagmatch.lineage import Lineage, LineageCache, ancestors, is_ancestor, resolve_lineage

if TYPE_CHECKING:
    from tagmatch.dispatch import Matcher

ROOT_NAME = "Root"


class VariantTag(str):
    """A variant's tag bound to the family it was looked up on.

    Compares equal to the plain tag string, so it can be used directly as a tag pattern;
    calling it builds a handle.
    """

    family: Family

    def __new__(cls, tag: str, family: Family) -> VariantTag:
        obj = super().__new__(cls, tag)
        obj.family = family
        return obj

    def __call__(self, *args: Any) -> Handle:
        return self.family.create(str(self), *args)

    def __repr__(self) -> str:
        return f"{self.family.name}.{str(self)}"


class Family:
    """A declared set of mutually exclusive variants."""

    def __init__(
        self,
        name: str,
        parent: Family | None = None,
        variants: Mapping[str, Family | None] | None = None,
        *,
        registry: FamilyRegistry | None = None,
    ) -> None:
        self.name = name
        self.parent = parent
        self.variants: dict[str, Family | None] = dict(variants or {})
        self.custom_equivalence: EquivalenceRule | None = None
        self._registry = registry

    @property
    def is_root(self) -> bool:
        return self is ROOT

    def ancestors(self) -> Iterator[Family]:
        return ancestors(self)

    def is_ancestor_of(self, other: Family) -> bool:
        return is_ancestor(self, other)

    def resolve(self, tag: str) -> Lineage:
        if self._registry is not None:
            return self._registry.resolve_lineage(self, tag)
        return resolve_lineage(self, tag)

    def __getattr__(self, name: str) -> VariantTag:
        if name.startswith("_"):
            raise AttributeError(name)
        self.resolve(name)
        return VariantTag(name, self)

    def create(self, tag: str, *args: Any) -> Handle:
        declaring, subtype = self.resolve(tag)
        if declaring is not self:
            raise MisroutedVariant(self, tag, declaring)
        return Handle.concrete(declaring, tag, self, subtype, tuple(args))

    def wildcard(self) -> Handle:
        """Handle matching any variant of this family, its ancestors' or its descendants'."""
        return Handle.wildcard_of(self)

    def matcher(self, *patterns: Any) -> Matcher:
        from tagmatch.dispatch import build_matcher

        return build_matcher(self, *patterns)

    def equivalence(self, rule: EquivalenceRule) -> EquivalenceRule:
        """Decorator installing a custom equivalence rule for this family and its subtypes."""
        self.custom_equivalence = rule
        return rule

    def subtype(self, tag: str) -> Family | None:
        return self.variants[tag]

    def __repr__(self) -> str:
        return f"<Family {self.name}>"


ROOT = Family(ROOT_NAME)

_RESERVED_NAMES = frozenset(dir(Family)) | frozenset(vars(ROOT))


def _normalize_variants(variants: Iterable[str] | Mapping[str, str | None]) -> dict[str, str | None]:
    if isinstance(variants, str):
        raise FamilyError(f"variants must be a collection of tags, not the string {variants!r}")
    if isinstance(variants, Mapping):
        normalized = dict(variants)
    else:
        normalized = {tag: None for tag in variants}
    for tag in normalized:
        if not isinstance(tag, str) or not tag.isidentifier() or tag.startswith("_"):
            raise FamilyError(f"invalid variant tag {tag!r}")
        if tag in _RESERVED_NAMES:
            raise FamilyError(f"variant tag {tag!r} clashes with a Family attribute")
    return normalized


class FamilyRegistry:
    """The hierarchy table: every declared family, by name, plus the lineage cache."""

    def __init__(self, cache: LineageCache | None = None, *, settings: TagMatchSettings | None = None) -> None:
        if cache is None:
            settings = settings or load_settings()
            cache = LineageCache(enabled=settings.cache_lineage)
        self.cache = cache
        self._families: dict[str, Family] = {}

    @property
    def root(self) -> Family:
        return ROOT

    def resolve_lineage(self, owner: Family, tag: str) -> Lineage:
        """Declaring family and subtype of ``tag`` as seen from ``owner``, memoized."""
        return resolve_lineage(owner, tag, self.cache)

    def is_ancestor(self, ancestor: Family, family: Family) -> bool:
        return is_ancestor(ancestor, family)

    def family(
        self,
        name: str,
        variants: Iterable[str] | Mapping[str, str | None] = (),
        *,
        parent: Family | None = None,
        equivalence: EquivalenceRule | None = None,
    ) -> Family:
        """Declare a family.

        Args:
            name: Unique family name, used by ``describe``.
            variants: Tags, or a mapping of tag to subtype name (None for a plain variant).
            parent: Family this one extends; defaults to the root.
            equivalence: Optional custom equivalence rule.

        Raises:
            FamilyError: duplicate or invalid names.
        """
        normalized = _normalize_variants(variants)
        subtype_names = [sub for sub in normalized.values() if sub is not None]
        for candidate in [name, *subtype_names]:
            if candidate == ROOT_NAME or candidate in self._families:
                raise FamilyError(f"family {candidate!r} is already declared")
        if len(set(subtype_names)) != len(subtype_names) or name in subtype_names:
            raise FamilyError(f"family {name!r} declares the same subtype twice")

        family = Family(name, parent or ROOT, registry=self)
        for tag, sub in normalized.items():
            family.variants[tag] = Family(sub, family, registry=self) if sub is not None else None
        family.custom_equivalence = equivalence

        self._families[name] = family
        for subtype in family.variants.values():
            if subtype is not None:
                self._families[subtype.name] = subtype

        logger.debug("family.declared name={} parent={} variants={}", name, family.parent.name, list(normalized))
        return family

    def __getitem__(self, name: str) -> Family:
        if name == ROOT_NAME:
            return ROOT
        return self._families[name]

    def __contains__(self, name: object) -> bool:
        return name == ROOT_NAME or name in self._families

    def __iter__(self) -> Iterator[Family]:
        return iter(self._families.values())

    def __len__(self) -> int:
        return len(self._families)


registry = FamilyRegistry(LineageCache())


def declare(
    name: str,
    variants: Iterable[str] | Mapping[str, str | None] = (),
    *,
    parent: Family | None = None,
    equivalence: EquivalenceRule | None = None,
) -> Family:
    """Declare a family in the default registry."""
    return registry.family(name, variants, parent=parent, equivalence=equivalence)
