"""Tests for the command-line argument parser."""

from decimal import Decimal

import pytest

from curvequote.main import build_parser


class TestParser:
    def test_quote_defaults(self) -> None:
        args = build_parser().parse_args(["quote", "Pool111", "--amount", "1.5"])
        assert args.command == "quote"
        assert args.amount == ["1.5"]
        assert args.direction == "quote_to_base"
        assert args.exact_output is False
        assert isinstance(args.slippage, Decimal)

    def test_repeated_amounts(self) -> None:
        args = build_parser().parse_args(
            ["quote", "Pool111", "--amount", "1", "--amount", "2", "--exact-output",
             "--direction", "base_to_quote", "--slippage", "0.005"]
        )
        assert args.amount == ["1", "2"]
        assert args.exact_output is True
        assert args.slippage == Decimal("0.005")

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_bonding_curve_command(self) -> None:
        args = build_parser().parse_args(["--rpc-url", "http://x", "bonding-curve", "Curve111"])
        assert args.rpc_url == "http://x"
        assert args.address == "Curve111"
