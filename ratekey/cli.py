import argparse
import os
import sys

from loguru import logger

from ratekey.core import (
    SUPPORTED_VARIABLES,
    ConfigurationError,
    ExtractionError,
    new_extractor,
)
from ratekey.request import SimpleRequest, headers_from_pairs


def run_extraction(variable, remote_addr="", host="", headers=None) -> int:
    try:
        extractor = new_extractor(variable)
    except ConfigurationError as error:
        print(f"❌ {error}")
        print(f"💡 Supported variables: {', '.join(SUPPORTED_VARIABLES)}")
        return 2

    request = SimpleRequest(remote_address=remote_addr, host=host, headers=headers or {})
    try:
        token, amount = extractor.extract(request)
    except ExtractionError as error:
        print(f"❌ {extractor}: {error}")
        return 1

    print(f"token={token} amount={amount}")
    return 0


def _header(value: str):
    try:
        return next(iter(headers_from_pairs([value]).items()))
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Show how a limiting variable identifies the source of a request."
    )
    parser.add_argument(
        "variable",
        type=str,
        help=f"Limiting variable, one of: {', '.join(SUPPORTED_VARIABLES)}",
    )
    parser.add_argument("--remote-addr", default="", help="Remote address, host:port")
    parser.add_argument("--host", default="", help="Value of the Host header")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        type=_header,
        default=[],
        help="Request header as 'Name: value', may be repeated",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("RATEKEY_LOG_LEVEL", "INFO"),
        help="Log level",
    )
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    sys.exit(
        run_extraction(
            variable=args.variable,
            remote_addr=args.remote_addr,
            host=args.host,
            headers=dict(args.header),
        )
    )
