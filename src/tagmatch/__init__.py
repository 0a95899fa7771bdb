"""Variant values with wildcard-aware equivalence and priority pattern dispatch."""

from loguru import logger

from tagmatch.dispatch import build_matcher, dispatch
from tagmatch.equivalence import (
    default_equivalent,
    equivalent,
    is_any_of,
    is_any_variant,
    is_variant,
    looks_like,
    same_args,
    same_variant,
)
from tagmatch.errors import FamilyError, MalformedPattern, MisroutedVariant, TagMatchError, UnknownVariant
from tagmatch.family import ROOT, Family, FamilyRegistry, VariantTag, declare, registry
from tagmatch.handle import Handle, describe
from tagmatch.lineage import LineageCache, is_ancestor
from tagmatch.patterns import PatternInfo, PatternKind, classify
from tagmatch.sentinels import ANY, Wildcard, _

# Silent until configure_logging() is called.
logger.disable("tagmatch")

__all__ = [
    "ANY",
    "ROOT",
    "Family",
    "FamilyError",
    "FamilyRegistry",
    "Handle",
    "LineageCache",
    "MalformedPattern",
    "MisroutedVariant",
    "PatternInfo",
    "PatternKind",
    "TagMatchError",
    "UnknownVariant",
    "VariantTag",
    "Wildcard",
    "_",
    "build_matcher",
    "classify",
    "declare",
    "default_equivalent",
    "describe",
    "dispatch",
    "equivalent",
    "is_ancestor",
    "is_any_of",
    "is_any_variant",
    "is_variant",
    "looks_like",
    "registry",
    "same_args",
    "same_variant",
]
