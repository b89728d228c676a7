"""
Command-line entry point.

Usage:
    ownergraph 3 1234 56
    ownergraph 1 00123 0045 --max-depth 3 --deadline 30 --verbose
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from ownergraph.config import settings
from ownergraph.ingestion.hpd import HPDAdapter
from ownergraph.ingestion.pluto import PlutoAdapter
from ownergraph.ingestion.socrata import SocrataClient
from ownergraph.nyc.bbl import InvalidSeedError
from ownergraph.portfolio.models import PortfolioResult
from ownergraph.portfolio.service import PortfolioService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ownergraph",
        description="Map the ownership network around an NYC property from HPD filings",
    )
    parser.add_argument("boro_code", help="Borough code (1-5)")
    parser.add_argument("block", help="Tax block")
    parser.add_argument("lot", help="Tax lot")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=settings.crawl_max_depth,
        help="Crawl rounds (default: %(default)s)",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=settings.crawl_deadline_seconds,
        help="Wall-clock budget in seconds, 0 for none (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


async def run(args: argparse.Namespace) -> PortfolioResult:
    socrata = SocrataClient()
    try:
        service = PortfolioService(
            registry=HPDAdapter(socrata),
            enrichment=PlutoAdapter(socrata),
        )
        return await service.build(
            (args.boro_code, args.block, args.lot),
            max_depth=args.max_depth,
            deadline_seconds=args.deadline,
        )
    finally:
        await socrata.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(run(args))
    except InvalidSeedError as e:
        print(f"ownergraph: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
