"""Shared fixtures for the erst test suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from erst.core.config import get_settings
from erst.core.types import CategorizedEvent, SimulationResponse


CONTRACT_A = "CONTRACT_A_EX"
CONTRACT_B = "CONTRACT_B_CH"
CONTRACT_C = "CONTRACT_C_TK"


def make_response(*events: tuple[str | None, str]) -> SimulationResponse:
    """Build a response from ``(contract_id, event_type)`` pairs."""
    return SimulationResponse(
        categorized_events=[
            CategorizedEvent(contract_id=cid, event_type=etype) for cid, etype in events
        ]
    )


# ── Isolation ────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached settings so env patches are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging() replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ── Simulation Fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def reference_response() -> SimulationResponse:
    """A: one write + one auth (cost 5, depth 2); B: one call (cost 1, depth 1)."""
    return make_response(
        (CONTRACT_A, "storage_write"),
        (CONTRACT_A, "require_auth"),
        (CONTRACT_B, "contract_call"),
    )


@pytest.fixture
def interleaved_response() -> SimulationResponse:
    """Interleaved events across three contracts plus host-level events."""
    return make_response(
        (CONTRACT_B, "contract_call"),
        (None, "diagnostic"),
        (CONTRACT_A, "require_auth"),
        (CONTRACT_C, "storage_write"),
        (CONTRACT_B, "storage_write"),
        (None, "host_fn"),
        (CONTRACT_A, "storage_write"),
        (CONTRACT_C, "event_emit"),
        (CONTRACT_B, "require_auth"),
    )


@pytest.fixture
def rpc_payload() -> dict[str, Any]:
    """Simulator result as it appears on the wire."""
    return {
        "categorizedEvents": [
            {"contractId": CONTRACT_A, "type": "storage_write"},
            {"contractId": CONTRACT_A, "type": "require_auth"},
            {"contractId": CONTRACT_B, "type": "contract_call"},
            {"contractId": None, "type": "diagnostic"},
        ],
        "latestLedger": 51234,
    }


@pytest.fixture
def fixture_file(tmp_path: Path, rpc_payload: dict[str, Any]) -> Path:
    path = tmp_path / "simulation.json"
    path.write_text(json.dumps(rpc_payload))
    return path
