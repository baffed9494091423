import pytest
from starlette.requests import Request

from ratekey.core import ConfigurationError, ExtractionError, ExtractorFunc
from ratekey.api import limiter as limiter_mod
from ratekey.api.limiter import (
    create_limiter,
    make_cost_func,
    make_key_func,
    parse_limits,
)


def make_request(client=("203.0.113.7", 54321), headers=None):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "client": client,
        "headers": [
            (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
        ],
    }
    return Request(scope)


def test_key_and_cost_funcs_use_extractor():
    extractor = create_limiter("client.ip").source_extractor
    request = make_request()
    assert make_key_func(extractor)(request) == "client.ip:203.0.113.7"
    assert make_cost_func(extractor)(request) == 1


def test_key_func_propagates_extraction_error():
    key_func = make_key_func(create_limiter("client.ip").source_extractor)
    with pytest.raises(ExtractionError):
        key_func(make_request(client=None))


def test_header_key_func():
    limiter = create_limiter("request.header.X-Api-Key")
    assert limiter._key_func(make_request(headers={"X-Api-Key": "abc123"})) == (
        "request.header.X-Api-Key:abc123"
    )
    # a missing header is still a non-empty limiter key
    assert limiter._key_func(make_request()) == "request.header.X-Api-Key:"


def test_key_funcs_do_not_share_buckets_across_variables():
    request = make_request(headers={"Host": "203.0.113.7"})
    by_ip = create_limiter("client.ip")._key_func(request)
    by_host = create_limiter("request.host")._key_func(request)
    assert by_ip != by_host


def test_create_limiter_rejects_bad_variable():
    with pytest.raises(ConfigurationError):
        create_limiter("request.header.")


def test_create_limiter_accepts_extractor():
    extractor = ExtractorFunc(key="static", func=lambda request: ("all", 3))
    limiter = create_limiter(extractor, ["5/second", "100/hour"])
    assert limiter.source_extractor is extractor
    assert limiter.source_limits == "5/second;100/hour"
    assert limiter.source_cost(make_request()) == 3


def test_create_limiter_default_limits():
    limiter = create_limiter("request.host")
    assert limiter.source_limits == "60/minute"
    # enforced by the route decorator only
    assert limiter._default_limits == []


@pytest.mark.parametrize(
    "value, expected",
    [
        ("60/minute", ["60/minute"]),
        ("10/second, 100/hour", ["10/second", "100/hour"]),
        (" ,5/day,", ["5/day"]),
    ],
)
def test_parse_limits(value, expected):
    assert parse_limits(value) == expected


def test_limiter_from_env(monkeypatch):
    monkeypatch.setenv("RATEKEY_SOURCE", "request.header.X-Tenant")
    monkeypatch.setenv("RATEKEY_LIMITS", "1/second,10/minute")
    limiter = limiter_mod.limiter_from_env()
    assert str(limiter.source_extractor) == "request.header.X-Tenant"
    assert limiter.source_limits == "1/second;10/minute"


def test_limiter_from_env_refuses_bad_source(monkeypatch):
    monkeypatch.setenv("RATEKEY_SOURCE", "client.port")
    with pytest.raises(ConfigurationError):
        limiter_mod.limiter_from_env()
