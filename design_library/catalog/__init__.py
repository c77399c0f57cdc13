"""
Catalog package for the design library API.

This package contains the design schemas, the in-memory query engine
(``records``, ``predicates`` and ``search``), the cached data source in
``store`` and the route definitions that expose filtered, sorted and
paginated views of the library to the storefront.
"""

from .router import router as catalog_router  # noqa: F401
