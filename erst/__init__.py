"""Erst: Soroban error decoder & debugger for the Stellar network."""

__version__ = "0.1.0"
