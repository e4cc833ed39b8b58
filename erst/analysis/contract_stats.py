"""Per-contract cost ranking for simulated Soroban transactions.

Answers the question a developer asks when a transaction fails or runs
over budget: which contract is burning the resources?

Two pieces:
  - Event cost classifier: maps an event tag to a relative integer weight.
  - Contract stats aggregator: folds the categorized event stream into one
    ``ContractStat`` per contract and ranks them most-expensive-first.

The weights form a heuristic *relative* cost model for ranking, not the
network's metering formula.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from erst.core.types import EventType, SimulationResponse

logger = logging.getLogger(__name__)


# ── Cost Model ───────────────────────────────────────────────────────────────

# Relative weight per event tag. New categories are added here.
COST_WEIGHTS: dict[str, int] = {
    EventType.STORAGE_WRITE.value: 4,
    EventType.REQUIRE_AUTH.value: 1,
}

DEFAULT_COST_WEIGHT = 1


def event_cost(event_type: str) -> int:
    """Return the cost weight for an event tag (default for unknown tags)."""
    if isinstance(event_type, EventType):
        event_type = event_type.value
    return COST_WEIGHTS.get(event_type, DEFAULT_COST_WEIGHT)


# ── Data Classes ─────────────────────────────────────────────────────────────

@dataclass
class ContractStat:
    """Aggregated activity of one contract within a single simulation."""
    contract_id: str
    estimated_cost: int = 0
    call_depth: int = 0     # attributed event count, not a call-stack depth
    event_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "estimated_cost": self.estimated_cost,
            "call_depth": self.call_depth,
            "event_counts": dict(self.event_counts),
        }


# ── Aggregation ──────────────────────────────────────────────────────────────

def build_contract_stats(response: SimulationResponse | None) -> list[ContractStat]:
    """Aggregate simulation events into per-contract stats, costliest first.

    Events without a contract id are skipped. Contracts with equal cost keep
    the order in which they were first seen in the event stream.

    Args:
        response: Simulation result; ``None`` is treated as an empty response.

    Returns:
        One ``ContractStat`` per distinct contract id, sorted by
        ``estimated_cost`` descending.
    """
    if response is None:
        return []

    # dict preserves first-seen order, which the stable sort keeps for ties
    by_contract: dict[str, ContractStat] = {}
    skipped = 0

    for event in response.categorized_events:
        if event.contract_id is None:
            skipped += 1
            continue

        stat = by_contract.get(event.contract_id)
        if stat is None:
            stat = ContractStat(contract_id=event.contract_id)
            by_contract[event.contract_id] = stat

        stat.estimated_cost += event_cost(event.event_type)
        stat.call_depth += 1
        stat.event_counts[event.event_type] = stat.event_counts.get(event.event_type, 0) + 1

    stats = sorted(by_contract.values(), key=lambda s: -s.estimated_cost)

    logger.debug(
        "Aggregated %d events into %d contracts (%d unattributed)",
        len(response.categorized_events),
        len(stats),
        skipped,
    )
    return stats


def count_unattributed(response: SimulationResponse | None) -> int:
    """Number of events not attributable to any contract."""
    if response is None:
        return 0
    return sum(1 for e in response.categorized_events if e.contract_id is None)


def total_cost(stats: list[ContractStat]) -> int:
    return sum(s.estimated_cost for s in stats)
