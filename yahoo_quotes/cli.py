from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from yahoo_quotes.config.settings import get_settings
from yahoo_quotes.errors import QuoteServiceError
from yahoo_quotes.integrations.yahoo_csv import YahooQuoteClient
from yahoo_quotes.schemas.quote import Quote


def format_quote(quote: Quote) -> str:
    return " ".join(f"{key}={value}" for key, value in quote.model_dump().items())


def usage(prog: str) -> str:
    return f"Usage : {prog} symbol [symbol] ..."


def main(argv: Optional[List[str]] = None, client: Optional[YahooQuoteClient] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="yahoo-quotes",
        description="Fetch quotes for equities and currencies from Yahoo Finance.",
    )
    parser.add_argument("symbols", nargs="*", metavar="symbol")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    if not args.symbols:
        print(usage(parser.prog))
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    symbols = sorted(args.symbols)
    client = client or YahooQuoteClient.from_settings(get_settings())

    try:
        quotes = client.get_quotes(symbols)
    except QuoteServiceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for quote in quotes:
        print(format_quote(quote))
    return 0


if __name__ == "__main__":
    sys.exit(main())
