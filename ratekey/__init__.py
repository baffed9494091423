from .core import (
    CLIENT_IP,
    HEADER_PREFIX,
    REQUEST_HOST,
    ConfigurationError,
    EmptyHeaderError,
    ExtractionError,
    ExtractorFunc,
    RateKeyError,
    SourceExtractor,
    new_extractor,
)
from .request import RequestView, SimpleRequest

__all__ = [
    "CLIENT_IP",
    "HEADER_PREFIX",
    "REQUEST_HOST",
    "ConfigurationError",
    "EmptyHeaderError",
    "ExtractionError",
    "ExtractorFunc",
    "RateKeyError",
    "RequestView",
    "SimpleRequest",
    "SourceExtractor",
    "new_extractor",
]
