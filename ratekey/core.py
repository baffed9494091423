from dataclasses import dataclass
from typing import Callable, Protocol, Tuple, runtime_checkable

from loguru import logger

from ratekey.request import RequestView

CLIENT_IP = "client.ip"
REQUEST_HOST = "request.host"
HEADER_PREFIX = "request.header."

SUPPORTED_VARIABLES = (CLIENT_IP, REQUEST_HOST, HEADER_PREFIX + "<Name>")


class RateKeyError(ValueError):
    """Base class for every error raised while deriving a request source."""


class ConfigurationError(RateKeyError):
    def __init__(self, variable, message: str = None):
        self.variable = variable
        super().__init__(message or f"unsupported limiting variable: '{variable}'")


class EmptyHeaderError(ConfigurationError):
    def __init__(self, variable: str):
        super().__init__(variable, f"wrong header: '{variable}' names no header")


class ExtractionError(RateKeyError):
    def __init__(self, remote_address: str):
        self.remote_address = remote_address
        super().__init__(f"failed to parse client IP: {remote_address!r}")


@runtime_checkable
class SourceExtractor(Protocol):
    """
    Identifies the source of a request, e.g. the client ip or a header value.

    ``extract`` returns ``(token, amount)``: the token buckets requests coming from
    the same source and the amount is how much of the quota one request consumes
    (1 for every built-in extractor). It raises ``ExtractionError`` when the source
    can not be identified.
    """

    @property
    def name(self) -> str: ...

    def extract(self, request: RequestView) -> Tuple[str, int]: ...


@dataclass(frozen=True)
class ExtractorFunc:
    key: str
    func: Callable[[RequestView], Tuple[str, int]]

    @property
    def name(self) -> str:
        return self.key

    def __str__(self) -> str:
        return self.key

    def extract(self, request: RequestView) -> Tuple[str, int]:
        return self.func(request)


def extract_client_ip(request: RequestView) -> Tuple[str, int]:
    # Everything after the first colon is treated as the port, so bare IPv6
    # literals keep only their leading segment.
    remote_address = request.remote_address or ""
    ip = remote_address.split(":", 1)[0]
    if not ip:
        raise ExtractionError(remote_address)
    return ip, 1


def extract_host(request: RequestView) -> Tuple[str, int]:
    return request.host or "", 1


def make_header_extractor(header: str) -> ExtractorFunc:
    def extract_header(request: RequestView) -> Tuple[str, int]:
        return request.header(header) or "", 1

    return ExtractorFunc(key=HEADER_PREFIX + header, func=extract_header)


def new_extractor(variable: str) -> SourceExtractor:
    """
    Build the extractor selected by a limiting variable.

    Args:
        variable: ``client.ip``, ``request.host`` or ``request.header.<Name>``.

    Raises:
        ConfigurationError: the variable is not recognised, or names an empty header.
    """
    if not isinstance(variable, str):
        logger.warning(f"Rejecting non-string limiting variable: {variable!r}")
        raise ConfigurationError(variable)

    if variable == CLIENT_IP:
        extractor = ExtractorFunc(key=variable, func=extract_client_ip)
    elif variable == REQUEST_HOST:
        extractor = ExtractorFunc(key=variable, func=extract_host)
    elif variable.startswith(HEADER_PREFIX):
        header = variable[len(HEADER_PREFIX) :]
        if not header:
            logger.warning(f"Rejecting limiting variable without header name: {variable!r}")
            raise EmptyHeaderError(variable)
        extractor = make_header_extractor(header)
    else:
        logger.warning(f"Rejecting unsupported limiting variable: {variable!r}")
        raise ConfigurationError(variable)

    logger.debug(f"Built source extractor {extractor}")
    return extractor
