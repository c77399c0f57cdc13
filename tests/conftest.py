"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from design_library.catalog.schemas import Design

# Fixed "now" for every age-dependent test.
REFERENCE = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def reference():
    return REFERENCE


@pytest.fixture
def make_design():
    """Factory building a published screen print design with overrides."""
    counter = {"next": 0}

    def _make(**overrides):
        fields = {
            "id": counter["next"],
            "design_number": str(1000 + counter["next"]),
            "design_type": "Screen Print",
        }
        fields.update(overrides)
        counter["next"] += 1
        return Design(**fields)

    return _make


@pytest.fixture
def catalog():
    """Eight designs: indices 0, 3, 4, 5 are screen print, 1, 2, 6, 7 embroidery."""
    rows = [
        dict(
            design_number="1001",
            design_type="Screen Print",
            name="Local 12 Solidarity",
            description="Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
            tags=["Union", "Solidarity"],
            category_hierarchies=["Union > Best Sellers"],
            date="2021-01-01",
        ),
        dict(
            design_number="1002",
            design_type="Embroidery",
            featured=True,
            name="Gold Eagle",
            description="Embossed thread with an elit finish.",
            tags=["Union", "Bold", "Gold"],
            category_hierarchies=["Union > Staff Favorites"],
            date="2023-09-01",
        ),
        dict(
            design_number="1003",
            design_type="Embroidery",
            featured=True,
            name="Tough Hands",
            description="Sed do eiusmod tempor.",
            tags=["Union", "Tough"],
            category_hierarchies=["Union > Classics"],
            date="2019-03-01",
        ),
        dict(
            design_number="1004",
            design_type="Screen Print",
            name="Tough as Nails",
            description="Ut enim ad minim veniam, elit.",
            tags=["Union", "Tough"],
            category_hierarchies=["Holiday/Event > Labor Day"],
            date="2023-01-01",
        ),
        dict(
            design_number="1005",
            design_type="Screen Print",
            name="Built Tough",
            description="Quis nostrud exercitation.",
            tags=["Union"],
            category_hierarchies=["Union > Apparel"],
            date="2024-01-01",
        ),
        dict(
            design_number="1006",
            design_type="Screen Print",
            name="Tough Local",
            description="Duis aute irure dolor.",
            tags=["Union"],
            category_hierarchies=["Union > Staff Favorites"],
            date="2022-12-01",
        ),
        dict(
            design_number="1007",
            design_type="Embroidery",
            name="Steward Patch",
            description="Excepteur sint occaecat, elit.",
            tags=["Union", "Patch"],
            category_hierarchies=["Union > Classics"],
        ),
        dict(
            design_number="1008",
            design_type="Embroidery",
            name="Picket Line",
            description="Cupidatat non proident.",
            tags=["Union", "Strike"],
            category_hierarchies=["Holiday/Event > Labor Day"],
            date="2024-03-01",
        ),
    ]
    return [Design(id=i, **row) for i, row in enumerate(rows)]
