"""FastAPI application serving lot dues reports."""

import logging

from fastapi import FastAPI

from lotdues import __version__
from lotdues.api.reports import router as reports_router
from lotdues.services.localizer import t

logger = logging.getLogger(__name__)

app = FastAPI(
    title=t("app.title"),
    description="Fund balances and lot quota debt reports",
    version=__version__,
)

app.include_router(reports_router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok"}
