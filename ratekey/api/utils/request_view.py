from starlette.requests import HTTPConnection

from ratekey.request import RequestView


class StarletteRequestView:
    """Exposes a starlette connection through the ``RequestView`` accessors."""

    def __init__(self, request: HTTPConnection):
        self.request = request

    @property
    def remote_address(self) -> str:
        client = self.request.client
        if client is None or not client.host:
            return ""
        host = client.host
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{client.port}"

    @property
    def host(self) -> str:
        return self.request.headers.get("host", "")

    def header(self, name: str) -> str:
        return self.request.headers.get(name, "")


def as_request_view(request) -> RequestView:
    if isinstance(request, HTTPConnection):
        return StarletteRequestView(request)
    return request
