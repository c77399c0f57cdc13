"""
Boolean predicates over a single design.

Each predicate answers one question about one design and is independent
of the others, so the filter pipeline can AND them in any order. An absent
query value always passes; a missing optional field on the design never
matches. String comparisons are case-insensitive.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Set

from . import records
from .schemas import AgeClass, Design, DesignStatus, DesignType

# Umbrella category that every design belongs to (through New or Classic).
QUICK_SEARCH = "quick search"

# Pseudo-subcategories resolved from the design date instead of its hierarchies.
NEW_DESIGNS = "new designs"
CLASSICS = "classics"

# Near-universal tags that say nothing about how related two designs are.
IGNORED_SIMILARITY_TAGS = frozenset({"union"})

DEFAULT_MINIMUM_SHARED_TAGS = 3


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def _norm_set(values: Iterable[Optional[str]]) -> Set[str]:
    return {_norm(v) for v in values if v}


def is_published(design: Design) -> bool:
    return design.status is not DesignStatus.DRAFT


def has_design_number(design: Design) -> bool:
    return design.design_number != "undefined"


def is_not_duplicate(
    design: Design, index: int, designs: Sequence[Design], allow_duplicates: bool = False
) -> bool:
    """Reject a design whose predecessor in ``designs`` has the same design number.

    Only the immediate predecessor is compared, so this suppresses variants
    only when ``designs`` is ordered by design number. Non-adjacent
    duplicates are kept.
    """
    if allow_duplicates or index == 0:
        return True
    return designs[index - 1].design_number != design.design_number


def matches_type(design: Design, wanted: Optional[DesignType] = None) -> bool:
    return wanted is None or design.design_type == wanted


def matches_category(design: Design, wanted: Optional[str] = None) -> bool:
    if not wanted:
        return True
    ncat = _norm(wanted)
    if ncat == QUICK_SEARCH:
        return True
    return any(_norm(p.category) == ncat for p in records.category_paths_of(design))


def matches_subcategories(
    design: Design,
    wanted: Optional[List[str]] = None,
    reference: Optional[datetime] = None,
) -> bool:
    if not wanted:
        return True
    nsubs = _norm_set(wanted)
    if NEW_DESIGNS in nsubs or CLASSICS in nsubs:
        age = records.age_classification(design, reference)
        if NEW_DESIGNS in nsubs and age is AgeClass.NEW:
            return True
        if CLASSICS in nsubs and age is AgeClass.CLASSIC:
            return True
    return any(_norm(sub) in nsubs for sub in records.subcategories_of(design))


def matches_keywords(design: Design, wanted: Optional[List[str]] = None) -> bool:
    """Substring match of any keyword against the searchable text of ``design``."""
    if not wanted:
        return True
    fields = [
        _norm(design.name),
        _norm(design.description),
        *[_norm(t) for t in records.tags_of(design) if t],
        # Raw hierarchies, so "union > best" matches "Union > Best Sellers".
        " ".join(_norm(h) for h in records.category_hierarchies_of(design) if h),
        _norm(design.design_number),
    ]
    keywords = [k for k in _norm_set(wanted) if k]
    if not keywords:
        return True
    return any(k in field for k in keywords for field in fields)


def matches_tags(design: Design, wanted: Optional[List[str]] = None) -> bool:
    """Exact (case-insensitive) match of any tag slot against ``wanted``."""
    if not wanted:
        return True
    ntags = _norm_set(wanted)
    return any(_norm(t) in ntags for t in records.tags_of(design) if t)


def matches_featured_only(
    design: Design, only_featured: bool = False, reference: Optional[datetime] = None
) -> bool:
    return not only_featured or records.effectively_featured(design, reference)


def passes_priority_exclusion(design: Design, exclude_prioritized: bool = False) -> bool:
    return not exclude_prioritized or design.priority is None


def shared_tags(design: Design, other: Design) -> Set[str]:
    """Tags the two designs have in common, ignoring near-universal ones."""
    mine = _norm_set(records.tags_of(design)) - IGNORED_SIMILARITY_TAGS
    theirs = _norm_set(records.tags_of(other)) - IGNORED_SIMILARITY_TAGS
    return mine & theirs


def matches_similarity(
    design: Design,
    reference_design: Optional[Design] = None,
    minimum_shared_tags: int = DEFAULT_MINIMUM_SHARED_TAGS,
) -> bool:
    if reference_design is None:
        return True
    return len(shared_tags(design, reference_design)) >= minimum_shared_tags
