"""
Data source for the catalogue API.

The catalogue snapshot is a JSON document with five top-level lists
(``designs``, ``categories``, ``subcategories``, ``tags`` and ``colors``)
whose entries are already typed; each entry is validated into the models
from ``schemas``. The bundled ``data/sample_designs.json`` is used unless
``CATALOG_DATA_FILE`` points elsewhere.

``DesignStore`` keeps the last loaded snapshot for a configurable window
so that a burst of requests does not re-read the file each time. Loading
also establishes the ordering the search engine relies on: designs are
stably sorted by design number and then numbered ``0..n-1``, so variants
sharing a design number sit next to each other.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ConfigDict, ValidationError

from .schemas import CatalogModel, Category, Design, Subcategory, Tag

logger = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """The catalogue snapshot could not be read or validated."""


class CatalogSnapshot(CatalogModel):
    """One immutable, fully validated copy of the catalogue."""

    model_config = ConfigDict(frozen=True)

    designs: Tuple[Design, ...] = ()
    categories: Tuple[Category, ...] = ()
    subcategories: Tuple[Subcategory, ...] = ()
    tags: Tuple[Tag, ...] = ()
    colors: Tuple[str, ...] = ()


def order_designs(designs: List[Design]) -> List[Design]:
    """Group designs by design number and assign positional ids.

    The sort is stable, so variants keep their upstream order among
    themselves.
    """
    ordered = sorted(designs, key=lambda d: d.design_number)
    return [d.model_copy(update={"id": i}) for i, d in enumerate(ordered)]


def parse_catalog(raw: Dict[str, Any]) -> CatalogSnapshot:
    """Validate a decoded catalogue document into a ``CatalogSnapshot``.

    Design entries may omit ``id``; ids are always reassigned from the
    final position.

    Raises
    ------
    CatalogUnavailableError
        If the document is not an object or an entry fails validation.
    """
    if not isinstance(raw, dict):
        raise CatalogUnavailableError("Catalog document must be a JSON object")
    try:
        designs = [
            Design.model_validate({**entry, "id": i})
            for i, entry in enumerate(raw.get("designs") or [])
        ]
        snapshot = CatalogSnapshot.model_validate(
            {
                "categories": raw.get("categories") or [],
                "subcategories": raw.get("subcategories") or [],
                "tags": raw.get("tags") or [],
                "colors": [str(c) for c in raw.get("colors") or []],
            }
        )
    except (TypeError, ValidationError) as exc:
        raise CatalogUnavailableError(f"Invalid catalog data: {exc}") from exc
    return snapshot.model_copy(update={"designs": tuple(order_designs(designs))})


def load_catalog_file(path: Path) -> CatalogSnapshot:
    """Read and validate the catalogue file at ``path``."""
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Error reading catalog file %s: %s", path, exc)
        raise CatalogUnavailableError(f"Catalog file unavailable: {path}") from exc
    snapshot = parse_catalog(raw)
    logger.info("Loaded %d designs from %s", len(snapshot.designs), path)
    return snapshot


class DesignStore:
    """Cached access to the catalogue snapshot.

    Parameters
    ----------
    data_file : Path
        Location of the catalogue JSON document.
    cache_seconds : float
        How long a loaded snapshot is served before the file is read
        again. ``0`` reloads on every call.
    clock : Callable[[], float]
        Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        data_file: Path,
        cache_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.data_file = Path(data_file)
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[CatalogSnapshot] = None
        self._loaded_at = 0.0

    def snapshot(self) -> CatalogSnapshot:
        # Snapshots are replaced wholesale, never mutated, so a caller keeps
        # a consistent view even if a reload happens meanwhile.
        with self._lock:
            now = self._clock()
            if self._snapshot is None or now - self._loaded_at >= self.cache_seconds:
                self._snapshot = load_catalog_file(self.data_file)
                self._loaded_at = now
            return self._snapshot

    def refresh(self) -> None:
        with self._lock:
            self._snapshot = None

    def designs(self) -> Tuple[Design, ...]:
        return self.snapshot().designs

    def find_design(self, design_id: int) -> Optional[Design]:
        return next((d for d in self.designs() if d.id == design_id), None)

    def categories(self) -> Tuple[Category, ...]:
        return self.snapshot().categories

    def subcategories(self) -> Tuple[Subcategory, ...]:
        return self.snapshot().subcategories

    def tags(self) -> Tuple[Tag, ...]:
        return self.snapshot().tags

    def colors(self) -> Tuple[str, ...]:
        return self.snapshot().colors
