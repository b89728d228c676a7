"""
Tests for the command-line entry point.
"""

import json
from unittest.mock import AsyncMock, patch

from ownergraph.cli import build_parser, main
from ownergraph.nyc.bbl import InvalidSeedError
from ownergraph.portfolio.models import PortfolioParty, PortfolioResult


class TestCli:
    """Tests for argument handling and output."""

    def test_parser_defaults(self):
        args = build_parser().parse_args(["3", "1234", "56"])

        assert (args.boro_code, args.block, args.lot) == ("3", "1234", "56")
        assert args.max_depth >= 1
        assert not args.verbose

    def test_prints_camel_case_json(self, capsys):
        result = PortfolioResult(
            entities=[PortfolioParty(name="ABC REALTY LLC", property_count=1)]
        )
        with patch("ownergraph.cli.run", AsyncMock(return_value=result)) as run:
            code = main(["1", "1000", "10", "--max-depth", "3", "--deadline", "5"])

        assert code == 0
        args = run.call_args[0][0]
        assert args.max_depth == 3
        assert args.deadline == 5.0

        data = json.loads(capsys.readouterr().out)
        assert data["entities"][0]["propertyCount"] == 1
        assert "commonAddresses" in data

    def test_invalid_seed_exit_status(self, capsys):
        with patch("ownergraph.cli.run", AsyncMock(side_effect=InvalidSeedError("Unknown borough code: '9'"))):
            code = main(["9", "1000", "10"])

        assert code == 2
        assert "Unknown borough code" in capsys.readouterr().err
