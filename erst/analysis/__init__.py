"""Analysis of simulated transactions.

Currently provides per-contract cost ranking (see ``contract_stats``).
"""

from erst.analysis.contract_stats import (
    COST_WEIGHTS,
    DEFAULT_COST_WEIGHT,
    ContractStat,
    build_contract_stats,
    event_cost,
)

__all__ = [
    "COST_WEIGHTS",
    "DEFAULT_COST_WEIGHT",
    "ContractStat",
    "build_contract_stats",
    "event_cost",
]
