"""
Derived facts about a ``Design``.

Nothing here mutates a design or caches anything on it: classification
and the implicit "featured" status are recomputed on every call, relative
to an explicit reference instant when one is given. Passing the same
reference makes every helper deterministic, which the search engine relies
on to classify a whole collection against one instant.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import List, NamedTuple, Optional, Union

from .schemas import HIERARCHY_SEPARATOR, AgeClass, Design

# Designs younger than two 365-day years are "new".
NEW_DESIGN_MAX_AGE = timedelta(days=2 * 365)

# A new design in this subcategory is featured without the curator flag.
BEST_SELLERS = "Best Sellers"

_NUMERIC_TOKEN = re.compile(r"\d+(?:\.\d+)?")


class CategoryPath(NamedTuple):
    category: str
    subcategory: Optional[str]


def tags_of(design: Design) -> List[Optional[str]]:
    """Return the tag slots of ``design`` in slot order, empty slots as ``None``."""
    return list(design.tags)


def category_hierarchies_of(design: Design) -> List[Optional[str]]:
    """Return the ``"<Category> > <Subcategory>"`` slots of ``design``."""
    return list(design.category_hierarchies)


def split_hierarchy(hierarchy: str) -> CategoryPath:
    """Split ``"Union > Best Sellers"`` into its category and subcategory.

    A hierarchy without the separator has no subcategory.
    """
    parts = hierarchy.split(HIERARCHY_SEPARATOR)
    return CategoryPath(parts[0], parts[1] if len(parts) > 1 else None)


def category_paths_of(design: Design) -> List[CategoryPath]:
    return [split_hierarchy(h) for h in design.category_hierarchies if h]


def subcategories_of(design: Design) -> List[str]:
    return [p.subcategory for p in category_paths_of(design) if p.subcategory]


def numeric_design_number(design: Design) -> Optional[Union[int, float]]:
    """Parse the leading token of the design number.

    ``"1320 (Sleeve)"`` gives ``1320``; ``"E11292"`` gives ``None`` because
    its first token is not fully numeric.
    """
    tokens = design.design_number.split()
    if not tokens or not _NUMERIC_TOKEN.fullmatch(tokens[0]):
        return None
    token = tokens[0]
    return float(token) if "." in token else int(token)


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are read as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def resolve_reference(reference: Optional[datetime] = None) -> datetime:
    return _as_utc(reference) if reference is not None else datetime.now(timezone.utc)


def age_classification(
    design: Design, reference: Optional[datetime] = None
) -> AgeClass:
    """Classify ``design`` as new or classic relative to ``reference`` (default: now).

    A missing date counts as infinitely old.
    """
    if design.date is None:
        return AgeClass.CLASSIC
    age = resolve_reference(reference) - _as_utc(design.date)
    return AgeClass.NEW if age < NEW_DESIGN_MAX_AGE else AgeClass.CLASSIC


def effectively_featured(design: Design, reference: Optional[datetime] = None) -> bool:
    """Curator flag, or a new design listed under "Best Sellers"."""
    if design.featured:
        return True
    return (
        BEST_SELLERS in subcategories_of(design)
        and age_classification(design, reference) is AgeClass.NEW
    )
