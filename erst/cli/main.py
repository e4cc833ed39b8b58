"""erst CLI: Soroban error decoder & debugger.

Usage:
    erst stats <fixture.json>       Rank contracts by estimated cost from a saved simulation
    erst stats --tx <hash>          Simulate a transaction and rank its contracts
    erst config                     Show current configuration
    erst --version                  Print version

Examples:
    erst stats ./simulation.json --top 5
    erst --timestamp 1700000000 stats --tx a1b2c3... --network testnet
    erst --window 3600 stats --tx a1b2c3... --format json -o stats.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from erst import __version__
from erst.analysis.contract_stats import (
    ContractStat,
    build_contract_stats,
    count_unattributed,
    total_cost,
)
from erst.core.config import Settings, get_settings
from erst.core.logging import setup_logging
from erst.core.networks import NETWORKS, get_network_config
from erst.core.types import SimulationResponse
from erst.simulator.client import (
    SimulatorClient,
    SimulatorError,
    load_simulation_response,
)

logger = logging.getLogger(__name__)


# ── Coloured output helpers ──────────────────────────────────────────────────

_RESET = "\033[0m"
_BOLD = "\033[1m"
_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"


def _c(text: str, code: str) -> str:
    return f"{code}{text}{_RESET}"


# ── Banner ───────────────────────────────────────────────────────────────────

BANNER = rf"""
{_BOLD}{_CYAN}  ___  ___  ___ _____
 | __|| _ \/ __|_   _|
 | _| |   /\__ \ | |
 |___||_|_\|___/ |_|{_RESET}
  {_DIM}Erst: Soroban Error Decoder & Debugger v{__version__}{_RESET}
"""


# ── CLI argument parser ─────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erst",
        description="Erst: debugging tool for Soroban transactions on the Stellar network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--no-banner", action="store_true", help="Suppress the startup banner")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity (default: from ERST_LOG_LEVEL)",
    )
    parser.add_argument(
        "--timestamp",
        type=int,
        default=0,
        help="Override the ledger header timestamp (Unix epoch)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=0,
        help="Run range simulation across a time window (seconds)",
    )

    sub = parser.add_subparsers(dest="command")

    # ── stats ────────────────────────────────────────────────────────────────
    stats_p = sub.add_parser("stats", help="Rank contracts by estimated execution cost")
    stats_p.add_argument("fixture", nargs="?", help="Saved simulation response (JSON)")
    stats_p.add_argument("--tx", help="Transaction hash to simulate")
    stats_p.add_argument(
        "--network",
        choices=sorted(NETWORKS),
        help="Network to simulate against (default: from ERST_NETWORK)",
    )
    stats_p.add_argument("--rpc-url", help="Simulator RPC endpoint (overrides --network)")
    stats_p.add_argument(
        "--format",
        "-f",
        choices=["table", "json"],
        help="Output format (default: table)",
    )
    stats_p.add_argument("--top", type=int, help="Show only the N most expensive contracts (0=all)")
    stats_p.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # ── config ───────────────────────────────────────────────────────────────
    sub.add_parser("config", help="Show current configuration")

    return parser


# ── Stats command ────────────────────────────────────────────────────────────


def _resolve_rpc_url(args: argparse.Namespace, settings: Settings) -> str:
    if args.rpc_url:
        return args.rpc_url
    if settings.rpc_url:
        return settings.rpc_url

    network_name = args.network or settings.network
    network = get_network_config(network_name)
    if network is None:
        raise SimulatorError(f"Unknown network '{network_name}'")
    return network.rpc_url


async def _obtain_response(args: argparse.Namespace, settings: Settings) -> SimulationResponse:
    """Load the simulation from a fixture or run it against the simulator."""
    if args.fixture:
        if args.timestamp or args.window:
            logger.warning("--timestamp/--window are ignored when replaying a fixture")
        return load_simulation_response(args.fixture)

    rpc_url = _resolve_rpc_url(args, settings)
    async with SimulatorClient(
        rpc_url,
        api_key=settings.rpc_api_key or None,
        timeout=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    ) as client:
        return await client.simulate(args.tx, timestamp=args.timestamp, window=args.window)


def _summarize(stats: list[ContractStat], response: SimulationResponse) -> dict[str, int]:
    return {
        "event_count": len(response.categorized_events),
        "contract_count": len(stats),
        "unattributed_events": count_unattributed(response),
        "total_cost": total_cost(stats),
    }


def _print_table(stats: list[ContractStat], summary: dict[str, int], quiet: bool = False) -> None:
    """Pretty-print contract stats, most expensive first."""
    if not quiet:
        print(f"\n{_BOLD}Contract stats{_RESET}")
        print(
            f"  Events: {summary['event_count']}"
            f"  |  Contracts: {summary['contract_count']}"
            f"  |  Unattributed: {summary['unattributed_events']}"
            f"  |  Total cost: {summary['total_cost']}\n"
        )

    if not stats:
        print(_c("  No contract activity in this simulation.", _DIM))
        return

    width = max(len("CONTRACT"), *(len(s.contract_id) for s in stats))
    print(f"  {_DIM}{'#':>4} {'CONTRACT':<{width}}  {'COST':>6}  {'DEPTH':>5}{_RESET}")
    for i, s in enumerate(stats, 1):
        name = _c(f"{s.contract_id:<{width}}", _BOLD) if i == 1 else f"{s.contract_id:<{width}}"
        print(f"  {_DIM}{i:>3}.{_RESET} {name}  {s.estimated_cost:>6}  {s.call_depth:>5}")
    print()


def _render_json(stats: list[ContractStat], summary: dict[str, int]) -> str:
    payload: dict[str, Any] = {
        "contracts": [s.to_dict() for s in stats],
        "total_cost": summary["total_cost"],
        "unattributed_events": summary["unattributed_events"],
    }
    return json.dumps(payload, indent=2)


async def _run_stats(args: argparse.Namespace) -> int:
    """Obtain a simulation, aggregate it and print the ranking."""
    settings = get_settings()

    if not args.fixture and not args.tx:
        print(_c("Error: provide a fixture file or --tx to simulate.", _RED), file=sys.stderr)
        return 1
    if args.fixture and args.tx:
        print(_c("Error: provide either a fixture file or --tx, not both.", _RED), file=sys.stderr)
        return 1

    try:
        response = await _obtain_response(args, settings)
    except SimulatorError as exc:
        print(_c(f"Simulation failed: {exc}", _RED), file=sys.stderr)
        return 1

    stats = build_contract_stats(response)
    summary = _summarize(stats, response)

    top = args.top if args.top is not None else settings.default_top
    if top > 0:
        stats = stats[:top]

    fmt = args.format or settings.default_format
    if fmt == "json":
        output = _render_json(stats, summary)
        if args.output:
            try:
                Path(args.output).write_text(output)
            except OSError as exc:
                print(_c(f"Error: cannot write '{args.output}': {exc}", _RED), file=sys.stderr)
                return 1
            if not args.quiet:
                print(f"  Written to {_c(args.output, _CYAN)}", file=sys.stderr)
        else:
            print(output)
    else:
        if args.output:
            print(_c("Warning: --output only applies to --format json; printing table.", _YELLOW), file=sys.stderr)
        _print_table(stats, summary, quiet=args.quiet)

    return 0


# ── Config command ───────────────────────────────────────────────────────────


def _run_config() -> int:
    """Print current settings (redacted)."""
    s = get_settings()
    print(f"\n{_BOLD}Erst Configuration{_RESET}\n")
    for field_name in sorted(type(s).model_fields.keys()):
        val = getattr(s, field_name, "")
        if any(kw in field_name for kw in ("password", "secret", "key", "token")):
            val = "****" if val else "(not set)"
        print(f"  {_DIM}{field_name}:{_RESET}  {val}")
    print()
    return 0


# ── Entrypoint ───────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"erst {__version__}")
        return 0

    settings = get_settings()
    setup_logging(settings.app_env, args.log_level or settings.log_level)

    if args.timestamp < 0 or args.window < 0:
        print(_c("Error: --timestamp and --window must be non-negative.", _RED), file=sys.stderr)
        return 1

    if not args.no_banner and not args.quiet:
        print(BANNER, file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "config":
        return _run_config()

    if args.command == "stats":
        return asyncio.run(_run_stats(args))

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
