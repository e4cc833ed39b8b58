"""Supported Stellar network configurations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkConfig:
    """Configuration for a Stellar network with Soroban RPC."""

    name: str
    short_name: str
    rpc_url: str
    network_passphrase: str
    horizon_url: str
    is_testnet: bool = False


# ── Network Registry ─────────────────────────────────────────────────────────

NETWORKS: dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(
        name="Stellar Public Network",
        short_name="pubnet",
        rpc_url="https://mainnet.sorobanrpc.com",
        network_passphrase="Public Global Stellar Network ; September 2015",
        horizon_url="https://horizon.stellar.org",
    ),
    "testnet": NetworkConfig(
        name="Stellar Testnet",
        short_name="testnet",
        rpc_url="https://soroban-testnet.stellar.org",
        network_passphrase="Test SDF Network ; September 2015",
        horizon_url="https://horizon-testnet.stellar.org",
        is_testnet=True,
    ),
    "futurenet": NetworkConfig(
        name="Stellar Futurenet",
        short_name="futurenet",
        rpc_url="https://rpc-futurenet.stellar.org",
        network_passphrase="Test SDF Future Network ; October 2022",
        horizon_url="https://horizon-futurenet.stellar.org",
        is_testnet=True,
    ),
}


def get_network_config(network_name: str) -> NetworkConfig | None:
    """Get network configuration by name."""
    return NETWORKS.get(network_name.lower())


def get_all_networks() -> list[NetworkConfig]:
    """Return all supported networks."""
    return list(NETWORKS.values())
