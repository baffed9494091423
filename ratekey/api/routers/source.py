from fastapi import APIRouter, Request
from slowapi import Limiter

from ratekey.api.schemas import SourceResponse, StatusResponse
from ratekey.api.utils.request_view import as_request_view


def create_router(limiter: Limiter) -> APIRouter:
    # slowapi appends a route limit on every limiter.limit() call, so each
    # limiter gets its router built once.
    router = getattr(limiter, "source_router", None)
    if router is not None:
        return router

    router = APIRouter()
    extractor = limiter.source_extractor

    @router.get("/status", response_model=StatusResponse)
    def status():
        return StatusResponse(variable=str(extractor))

    @router.get("", response_model=SourceResponse)
    @limiter.limit(limiter.source_limits, cost=limiter.source_cost)
    async def source(request: Request):
        token, amount = extractor.extract(as_request_view(request))
        return SourceResponse(variable=str(extractor), token=token, amount=amount)

    limiter.source_router = router
    return router
