"""Simulator access: RPC client and fixture replay."""

from erst.simulator.client import (
    InvalidResponseError,
    SimulatorClient,
    SimulatorError,
    SimulatorRPCError,
    load_simulation_response,
)

__all__ = [
    "InvalidResponseError",
    "SimulatorClient",
    "SimulatorError",
    "SimulatorRPCError",
    "load_simulation_response",
]
