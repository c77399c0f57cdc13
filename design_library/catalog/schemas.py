"""
Pydantic schema definitions for the catalog module.

The ``Design`` model is one entry of the design library as delivered by
the data source: already typed, with the numbered tag and subcategory
columns of the upstream sheet folded into fixed-size slot lists. The
``PaginatedDesigns`` model bundles one page of designs with paging
metadata, and ``DesignQuery`` carries every recognised search parameter
from the HTTP layer down to the search engine.

All models use camelCase aliases on the wire (``designNumber``,
``pageNumber``...) while Python code uses snake_case field names.
"""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime, time, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Number of tag and category hierarchy slots carried by every design.
TAG_SLOTS = 12
HIERARCHY_SLOTS = 5

# Separator between the two halves of a category hierarchy string.
HIERARCHY_SEPARATOR = " > "


class DesignType(str, Enum):
    SCREEN_PRINT = "Screen Print"
    EMBROIDERY = "Embroidery"


class DesignStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"


class AgeClass(str, Enum):
    NEW = "New"
    CLASSIC = "Classic"


class SortingType(str, Enum):
    DESIGN_NUMBER = "design number"
    PRIORITY = "priority"


class CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _fill_slots(value: Any, size: int, label: str) -> List[Optional[str]]:
    """Normalise a sparse slot list to exactly ``size`` entries.

    Empty slots stay where they are; the list is padded with ``None`` but
    never compacted, so slot ``i`` always means column ``i`` upstream.
    """
    if isinstance(value, str):
        value = [value]
    slots = list(value or [])
    if len(slots) > size:
        raise ValueError(f"at most {size} {label} are allowed, got {len(slots)}")
    slots = [_blank_to_none(slot) for slot in slots]
    return slots + [None] * (size - len(slots))


class Design(CatalogModel):
    """A single catalog entry.

    ``id`` is the positional index assigned by the data source when the
    snapshot is loaded; it is unique within a snapshot but not stable
    across reloads. ``design_number`` is the human-facing identifier and is
    intentionally not unique: variants of one physical design share it.

    ``date`` is optional. Unparsable dates are stored as ``None`` and the
    design is then always classified as a classic.
    """

    id: int
    design_number: str
    design_type: DesignType
    status: DesignStatus = DesignStatus.PUBLISHED
    featured: bool = False
    # Smaller numbers rank first; None means unranked.
    priority: Optional[int] = None
    date: Optional[datetime] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tags: List[Optional[str]] = Field(default_factory=list, validate_default=True)
    category_hierarchies: List[Optional[str]] = Field(
        default_factory=list, validate_default=True
    )
    default_background_color: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("design_number", mode="before")
    @classmethod
    def coerce_design_number(cls, value: Any) -> str:
        # Rows without a design number surface as the literal "undefined",
        # which the search engine filters out.
        return "undefined" if value is None else str(value)

    @field_validator("priority", mode="before")
    @classmethod
    def lenient_priority(cls, value: Any) -> Optional[int]:
        # Anything that is not a whole number leaves the design unranked.
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[datetime]:
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, date_type):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        return None

    @field_validator("tags", mode="before")
    @classmethod
    def tag_slots(cls, value: Any) -> List[Optional[str]]:
        return _fill_slots(value, TAG_SLOTS, "tags")

    @field_validator("category_hierarchies", mode="before")
    @classmethod
    def hierarchy_slots(cls, value: Any) -> List[Optional[str]]:
        return _fill_slots(value, HIERARCHY_SLOTS, "category hierarchies")


class Category(CatalogModel):
    name: str
    design_type: Optional[DesignType] = None


class Subcategory(CatalogModel):
    name: str
    parent_category: str
    hierarchy: str = Field(pattern=r"^.+ > .+$")


class Tag(CatalogModel):
    name: str


class DesignQuery(CatalogModel):
    """Search parameters understood by ``search.filter_designs``.

    Every field is optional; an empty query returns every published
    design. ``tags`` is accepted but not applied by the filter pipeline.
    ``age_reference`` pins the instant used for new/classic classification
    and defaults to the time of the call.
    """

    keywords: Optional[List[str]] = None
    category: Optional[str] = None
    subcategories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    design_type: Optional[DesignType] = None
    only_featured: bool = False
    allow_duplicate_design_numbers: bool = False
    exclude_prioritized: bool = False
    similar_to_id: Optional[int] = None
    minimum_shared_tags: int = 3
    age_reference: Optional[datetime] = None


class PaginatedDesigns(CatalogModel):
    """A wrapper for paginated results returned from the ``/designs`` endpoint."""

    page_number: int
    per_page: int
    total: int
    total_pages: int
    designs: List[Design]
