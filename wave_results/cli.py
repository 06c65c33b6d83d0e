#!/usr/bin/env python3
"""Command line entry point for wave-results.

Subcommands:
    load      import archived sessions from the results directory
    compare   render a comparison report for several sessions
    key       print the comparison key for a set of tokens
    tokens    list the tokens stored under a comparison key
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import ResultsConfig
from .errors import ResultsError
from .results.paths import compute_comparison_key
from .results.results_manager import ResultsManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wave-results",
        description="Persist and compare conformance test results",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config JSON")
    parser.add_argument("--results-dir", default=None, help="Override the results directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Import archived sessions")
    load_parser.add_argument("--strict", action="store_true", help="Stop at the first malformed archive")

    compare_parser = subparsers.add_parser("compare", help="Render a comparison report")
    compare_parser.add_argument("tokens", nargs="+", help="Session tokens to compare")
    compare_parser.add_argument("--api", required=True, help="API to compare")
    compare_parser.add_argument("--reference", default=None, help="Reference session token")

    key_parser = subparsers.add_parser("key", help="Print the comparison key")
    key_parser.add_argument("tokens", nargs="+", help="Session tokens")
    key_parser.add_argument("--reference", default=None, help="Reference session token")

    tokens_parser = subparsers.add_parser("tokens", help="List tokens in a comparison")
    tokens_parser.add_argument("key", help="Comparison key")

    return parser


async def _run(args: argparse.Namespace, config: ResultsConfig) -> int:
    manager = ResultsManager.from_config(config)

    if args.command == "load":
        summary = await manager.load_results(strict=args.strict)
        print(json.dumps(summary.to_dict(), indent=2))
        return 1 if summary.failed else 0

    if args.command == "compare":
        report = await manager.get_html_path(
            args.api, tokens=args.tokens, reference_token=args.reference
        )
        print(report)
        return 0

    if args.command == "tokens":
        print(json.dumps(manager.get_tokens_from_hash(args.key), indent=2))
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "key":
        print(compute_comparison_key(args.tokens, args.reference))
        return 0

    config = ResultsConfig.load(args.config)
    if args.results_dir:
        config.results_directory = args.results_dir

    try:
        return asyncio.run(_run(args, config))
    except ResultsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
