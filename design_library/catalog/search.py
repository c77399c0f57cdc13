"""
Catalog query engine: filter, sort and page a design collection.

The three steps are run in that order by the HTTP layer:

* ``filter_designs()`` keeps the designs that pass every predicate
  applicable to a ``DesignQuery``, preserving input order. Duplicate
  suppression compares each design with its predecessor in the *input*
  order, so the collection must arrive ordered by design number (the data
  source guarantees this) and must be filtered before it is sorted.

* ``sort_designs()`` puts effectively featured designs first and orders
  each partition by design number or by priority. The sort is stable.

* ``get_page()`` cuts one 1-indexed page out of the sorted result.

The engine holds no state and performs no I/O; concurrent calls are safe
as long as callers do not mutate the collection they pass in.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from . import predicates, records
from .schemas import Design, DesignQuery, SortingType

logger = logging.getLogger(__name__)


def _find_design(designs: Sequence[Design], design_id: int) -> Optional[Design]:
    return next((d for d in designs if d.id == design_id), None)


def is_ordered_by_design_number(designs: Sequence[Design]) -> bool:
    """True when ``designs`` is in the order duplicate suppression relies on."""
    return all(
        prev.design_number <= cur.design_number for prev, cur in zip(designs, designs[1:])
    )


def filter_designs(
    designs: Sequence[Design], query: Optional[DesignQuery] = None
) -> List[Design]:
    """Return the designs matching ``query`` in their original order.

    Parameters
    ----------
    designs : Sequence[Design]
        The full collection, ordered by design number.
    query : Optional[DesignQuery]
        Search parameters. ``None`` behaves like an empty query and
        returns every published design that is not an adjacent duplicate.

    Returns
    -------
    List[Design]
        A new list; ``designs`` itself is not modified.
    """
    query = query or DesignQuery()
    # One instant for the whole pass so every design is classified alike.
    reference = records.resolve_reference(query.age_reference)

    similar_to: Optional[Design] = None
    if query.similar_to_id is not None:
        similar_to = _find_design(designs, query.similar_to_id)
        if similar_to is None:
            logger.debug(
                "Similarity reference %s not found; similarity not applied",
                query.similar_to_id,
            )
    if query.tags:
        logger.debug("Tag filter %s is accepted but not applied", query.tags)
    if not query.allow_duplicate_design_numbers and not is_ordered_by_design_number(designs):
        logger.debug(
            "Designs are not ordered by design number; non-adjacent duplicates are kept"
        )

    def _keep(index: int, design: Design) -> bool:
        return (
            predicates.is_published(design)
            and predicates.has_design_number(design)
            and predicates.is_not_duplicate(
                design, index, designs, query.allow_duplicate_design_numbers
            )
            and predicates.matches_type(design, query.design_type)
            and predicates.matches_category(design, query.category)
            and predicates.matches_subcategories(design, query.subcategories, reference)
            and predicates.matches_featured_only(design, query.only_featured, reference)
            and predicates.passes_priority_exclusion(design, query.exclude_prioritized)
            and predicates.matches_keywords(design, query.keywords)
            and predicates.matches_similarity(
                design, similar_to, query.minimum_shared_tags
            )
        )

    return [d for i, d in enumerate(designs) if _keep(i, d)]


def parse_sorting_type(value: Optional[Union[str, SortingType]]) -> SortingType:
    """Map a strategy name to a ``SortingType``, falling back to the default."""
    if isinstance(value, SortingType):
        return value
    try:
        return SortingType((value or "").strip().lower())
    except ValueError:
        logger.debug("Unknown sort strategy %r; sorting by design number", value)
        return SortingType.DESIGN_NUMBER


def _design_number_key(design: Design) -> Tuple[bool, float]:
    # Parsable numbers first, highest first; unparsable ones tie.
    number = records.numeric_design_number(design)
    return (number is None, -number if number is not None else 0)


def _priority_key(design: Design) -> Tuple[bool, float, Tuple[bool, float]]:
    if design.priority is None:
        return (True, 0, _design_number_key(design))
    return (False, design.priority, (False, 0))


def sort_designs(
    designs: List[Design],
    strategy: Union[str, SortingType, None] = SortingType.DESIGN_NUMBER,
    reference: Optional[datetime] = None,
) -> List[Design]:
    """Sort ``designs`` in place and return it.

    Effectively featured designs always come first. Within each group the
    strategy decides the order; designs the strategy cannot tell apart
    keep their relative input order.
    """
    strategy = parse_sorting_type(strategy)
    reference = records.resolve_reference(reference)
    by_strategy = (
        _priority_key if strategy is SortingType.PRIORITY else _design_number_key
    )
    designs.sort(
        key=lambda d: (not records.effectively_featured(d, reference), by_strategy(d))
    )
    return designs


def get_page(designs: Sequence[Design], page_number: int, page_size: int) -> List[Design]:
    """Return page ``page_number`` (1-indexed) of ``page_size`` designs.

    Pages past the end, page numbers below 1 and non-positive page sizes
    all give an empty list.
    """
    if page_number < 1 or page_size <= 0:
        return []
    start = page_size * (page_number - 1)
    return list(designs[start : start + page_size])


def total_pages(total: int, page_size: int) -> int:
    if total <= 0 or page_size <= 0:
        return 1
    return (total + page_size - 1) // page_size
