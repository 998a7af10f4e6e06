"""Look up an address, IP or point from the command line.

Usage:
    python -m geosearch.tools.lookup "1600 Amphitheatre Pkwy"
    python -m geosearch.tools.lookup 8.8.8.8 --json
    python -m geosearch.tools.lookup --lat 37.4 --lon -122.1
    python -m geosearch.tools.lookup "Main St" --provider nominatim --region us --explain
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from geosearch import context
from geosearch.config import Settings
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import GeosearchError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocode an address, IP address or coordinates")
    parser.add_argument("query", nargs="?", default="", help="address or IP address")
    parser.add_argument("--lat", type=float, help="latitude for a reverse lookup")
    parser.add_argument("--lon", type=float, help="longitude for a reverse lookup")
    parser.add_argument("--region", help="two-letter region hint")
    parser.add_argument("--provider", help="street address provider to use instead of the configured one")
    parser.add_argument("--explain", action="store_true", help="print which provider the query goes to")
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def resolve_query(args: argparse.Namespace):
    if args.lat is not None or args.lon is not None:
        if args.lat is None or args.lon is None:
            raise SystemExit("--lat and --lon must be given together")
        return (args.lat, args.lon)
    return args.query


def format_results(results: list[GeocodeResult], as_json: bool) -> str:
    if as_json:
        return json.dumps(
            [
                {
                    "latitude": r.latitude,
                    "longitude": r.longitude,
                    "address": r.address,
                    "provider": r.provider,
                }
                for r in results
            ],
            ensure_ascii=False,
            indent=2,
        )
    if not results:
        return "No results"
    return "\n".join(
        f"{i}. {r.address} ({r.latitude:.6f}, {r.longitude:.6f}) [{r.provider}]"
        for i, r in enumerate(results, start=1)
    )


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    if args.provider:
        settings = settings.model_copy(update={"lookup": args.provider})
    geocoder = context.build_geocoder(settings)

    query = resolve_query(args)
    options = {"region": args.region} if args.region else None
    try:
        if args.explain:
            identity = geocoder.provider_for(query)
            print(f"provider: {getattr(identity, 'value', identity)}")
        results = await geocoder.search(query, options)
    except GeosearchError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    finally:
        if geocoder.cache is not None:
            await geocoder.cache.store.close()

    print(format_results(results, args.json))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s | %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
