# ratekey/api/limiter.py
import os

from fastapi import Request
from slowapi import Limiter

from ratekey.core import SourceExtractor, new_extractor
from ratekey.api.utils.request_view import as_request_view

DEFAULT_SOURCE = "client.ip"
DEFAULT_LIMITS = "60/minute"


def make_key_func(extractor: SourceExtractor):
    def key_func(request: Request) -> str:
        token, _ = extractor.extract(as_request_view(request))
        # never empty, slowapi skips limits keyed by an empty string
        return f"{extractor}:{token}"

    return key_func


def make_cost_func(extractor: SourceExtractor):
    def cost_func(request: Request) -> int:
        _, amount = extractor.extract(as_request_view(request))
        return amount

    return cost_func


def parse_limits(value: str) -> list:
    return [limit.strip() for limit in value.split(",") if limit.strip()]


def create_limiter(source, limits=None) -> Limiter:
    """
    Build a slowapi limiter keyed by a source extractor.

    ``source`` is a limiting variable such as ``client.ip``, or an already built
    ``SourceExtractor``.

    A bad variable raises ``ConfigurationError`` before any limiter exists.
    """
    if isinstance(source, SourceExtractor):
        extractor = source
    else:
        extractor = new_extractor(source)
    limits = limits or [DEFAULT_LIMITS]
    limiter = Limiter(key_func=make_key_func(extractor))
    limiter.source_extractor = extractor
    limiter.source_cost = make_cost_func(extractor)
    limiter.source_limits = ";".join(limits)
    return limiter


def limiter_from_env() -> Limiter:
    return create_limiter(
        os.environ.get("RATEKEY_SOURCE", DEFAULT_SOURCE),
        limits=parse_limits(os.environ.get("RATEKEY_LIMITS", DEFAULT_LIMITS)),
    )


limiter = limiter_from_env()
