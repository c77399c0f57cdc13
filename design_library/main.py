# design_library/main.py
import logging

from fastapi import FastAPI

from .catalog import catalog_router
from .config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Design Library API",
    description="Catalogue browsing backend for the design library.",
    version="1.0.0",
)

app.include_router(catalog_router)


@app.get("/")
def health_check():
    return {"status": "ok"}
