"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /designs              : filtered, sorted and paginated designs
- GET  /designs/{design_id}  : one design
- GET  /categories           : category reference list
- GET  /subcategories        : subcategory reference list
- GET  /tags                 : tag reference list
- GET  /colors               : background color reference list

Query strings are parsed here the way the storefront sends them: lists
are comma separated, flags are on only for the literal ``"true"`` and
numbers fall back to their defaults when they do not parse.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings
from . import predicates, search
from .schemas import Category, Design, DesignQuery, DesignType, PaginatedDesigns, Subcategory, Tag
from .store import CatalogSnapshot, CatalogUnavailableError, DesignStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@lru_cache
def get_store() -> DesignStore:
    return DesignStore(settings.CATALOG_DATA_FILE, settings.CATALOG_CACHE_SECONDS)


def get_snapshot(store: DesignStore = Depends(get_store)) -> CatalogSnapshot:
    try:
        return store.snapshot()
    except CatalogUnavailableError as exc:
        logger.error("Catalog unavailable: %s", exc)
        raise HTTPException(status_code=503, detail="Catalog unavailable") from exc


def split_comma_separated(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    items = [part.strip() for part in value.split(",") if part.strip()]
    return items or None


def parse_flag(value: Optional[str]) -> bool:
    return value == "true"


def parse_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def find_published(designs: Sequence[Design], design_id: int) -> Optional[Design]:
    """Look up a design by id; drafts are never visible."""
    design = next((d for d in designs if d.id == design_id), None)
    if design is None or not predicates.is_published(design):
        return None
    return design


def parse_design_type(value: Optional[str]) -> Optional[DesignType]:
    if not value:
        return None
    try:
        return DesignType(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid design type: {value}") from exc


@router.get("/designs", response_model=PaginatedDesigns)
def list_designs(
    keywords: Optional[str] = Query(default=None, description="Comma-separated keywords"),
    category: Optional[str] = Query(default=None),
    subcategories: Optional[str] = Query(default=None, description="Comma-separated subcategories"),
    tags: Optional[str] = Query(default=None, description="Comma-separated tags (not applied)"),
    design_type: Optional[str] = Query(default=None, alias="designType"),
    featured: Optional[str] = Query(default=None),
    allow_duplicates: Optional[str] = Query(default=None, alias="allowDuplicates"),
    exclude_prioritized: Optional[str] = Query(default=None, alias="excludePrioritized"),
    similar_to: Optional[str] = Query(default=None, alias="similarTo"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    page_number: Optional[str] = Query(default=None, alias="pageNumber"),
    per_page: Optional[str] = Query(default=None, alias="perPage"),
    snapshot: CatalogSnapshot = Depends(get_snapshot),
) -> PaginatedDesigns:
    """Return one page of designs matching the query.

    An empty result is a normal response with an empty ``designs`` list.
    """
    designs = snapshot.designs

    similar_to_id = parse_int(similar_to, None)
    if similar_to_id is not None and find_published(designs, similar_to_id) is None:
        raise HTTPException(status_code=404, detail="Design not found")

    query = DesignQuery(
        keywords=split_comma_separated(keywords),
        category=category or None,
        subcategories=split_comma_separated(subcategories),
        tags=split_comma_separated(tags),
        design_type=parse_design_type(design_type),
        only_featured=parse_flag(featured),
        allow_duplicate_design_numbers=parse_flag(allow_duplicates),
        exclude_prioritized=parse_flag(exclude_prioritized),
        similar_to_id=similar_to_id,
        minimum_shared_tags=settings.SIMILAR_MIN_SHARED_TAGS,
        age_reference=datetime.now(timezone.utc),
    )

    # 1) Filter against the load order, 2) sort, 3) page
    results = search.filter_designs(designs, query)
    search.sort_designs(results, sort_by, query.age_reference)

    page = max(1, parse_int(page_number, 1))
    page_size = parse_int(per_page, settings.DEFAULT_PAGE_SIZE)
    page_size = min(max(1, page_size), settings.MAX_PAGE_SIZE)

    return PaginatedDesigns(
        page_number=page,
        per_page=page_size,
        total=len(results),
        total_pages=search.total_pages(len(results), page_size),
        designs=search.get_page(results, page, page_size),
    )


@router.get("/designs/{design_id}", response_model=Design)
def get_design(design_id: int, snapshot: CatalogSnapshot = Depends(get_snapshot)) -> Design:
    design = find_published(snapshot.designs, design_id)
    if design is None:
        raise HTTPException(status_code=404, detail="Design not found")
    return design


@router.get("/categories", response_model=List[Category])
def list_categories(snapshot: CatalogSnapshot = Depends(get_snapshot)) -> List[Category]:
    return list(snapshot.categories)


@router.get("/subcategories", response_model=List[Subcategory])
def list_subcategories(snapshot: CatalogSnapshot = Depends(get_snapshot)) -> List[Subcategory]:
    return list(snapshot.subcategories)


@router.get("/tags", response_model=List[Tag])
def list_tags(snapshot: CatalogSnapshot = Depends(get_snapshot)) -> List[Tag]:
    return list(snapshot.tags)


@router.get("/colors", response_model=List[str])
def list_colors(snapshot: CatalogSnapshot = Depends(get_snapshot)) -> List[str]:
    return list(snapshot.colors)
