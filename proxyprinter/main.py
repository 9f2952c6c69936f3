import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from proxyprinter.api import (
    cards_router,
    deck_router,
    health_router,
    printing_router,
)
from proxyprinter.config import settings
from proxyprinter.models.failure import KnownError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("proxyprinter"),
    debug=settings.debug,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a classified failure as its FailureDetail."""
    logger.warning("%s: %s (%s)", exc.kind.value, exc.message, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


app.include_router(cards_router)
app.include_router(deck_router)
app.include_router(health_router)
app.include_router(printing_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
