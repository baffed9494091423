import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ratekey.core import ExtractionError
from ratekey.api.routers import source

load_dotenv()


async def _source_unidentified_handler(request: Request, exc: ExtractionError):
    logger.warning(f"Refusing request from unidentified source: {exc}")
    return JSONResponse(
        status_code=400, content={"detail": "could not identify request source"}
    )


def create_app(limiter: Limiter = None) -> FastAPI:
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get("RATEKEY_LOG_LEVEL", "INFO").upper())

    if limiter is None:
        # Imported late so the environment from .env is in place.
        from ratekey.api.limiter import limiter as default_limiter

        limiter = default_limiter

    app = FastAPI(title="RateKey API")
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(ExtractionError, _source_unidentified_handler)

    app.include_router(
        source.create_router(limiter), prefix="/api/v1/source", tags=["source"]
    )
    logger.info(
        f"Rate limiting by {limiter.source_extractor} at {limiter.source_limits}"
    )
    return app


app = create_app()
