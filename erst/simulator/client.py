"""Soroban simulator client: JSON-RPC over HTTP and fixture replay."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from erst.core.types import SimulationResponse

logger = logging.getLogger(__name__)


class SimulatorError(Exception):
    """Base exception for failures to obtain a simulation response."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class SimulatorRPCError(SimulatorError):
    """The simulator answered with a JSON-RPC error object."""

    def __init__(self, message: str, code: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.code = code


class InvalidResponseError(SimulatorError):
    """The payload is not a valid simulation response."""


def parse_simulation_response(payload: Any) -> SimulationResponse:
    """Validate a decoded simulator payload into a ``SimulationResponse``."""
    if not isinstance(payload, dict):
        raise InvalidResponseError(
            f"Expected a JSON object, got {type(payload).__name__}",
            response=payload,
        )
    try:
        return SimulationResponse.model_validate(payload)
    except ValidationError as exc:
        raise InvalidResponseError(
            f"Malformed simulation response: {exc.error_count()} validation error(s)",
            response=payload,
        ) from exc


def _unwrap_envelope(data: Any) -> Any:
    """Return the ``result`` of a JSON-RPC envelope, or ``data`` unchanged."""
    if not isinstance(data, dict) or "jsonrpc" not in data:
        return data
    error = data.get("error")
    if error and not isinstance(error, dict):
        raise SimulatorRPCError(str(error), response=data)
    if error:
        raise SimulatorRPCError(
            error.get("message", "Unknown simulator error"),
            code=error.get("code", 0),
            response=data,
        )
    return data.get("result")


def load_simulation_response(path: str | Path) -> SimulationResponse:
    """Load a simulation response from a JSON fixture file.

    The file may hold the bare response object or a full JSON-RPC envelope.

    Raises:
        InvalidResponseError: If the file is unreadable, not JSON, or not a
            valid simulation response
        SimulatorRPCError: If the envelope carries an error object
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidResponseError(f"Cannot read fixture '{path}': {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidResponseError(f"Fixture '{path}' is not valid JSON: {exc}") from exc

    response = parse_simulation_response(_unwrap_envelope(data))
    logger.info("Loaded %d events from %s", len(response.categorized_events), path)
    return response


class SimulatorClient:
    """Async client for a Soroban simulation RPC endpoint.

    Usage::

        async with SimulatorClient("https://soroban-testnet.stellar.org") as client:
            response = await client.simulate("a1b2c3...", timestamp=1700000000)
            for event in response.categorized_events:
                print(event.contract_id, event.event_type)
    """

    def __init__(
        self,
        rpc_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self.rpc_url = rpc_url
        self._max_retries = max(1, max_retries)
        self._request_id = 0

        headers: dict[str, str] = {
            "User-Agent": "erst/0.1.0",
            "Accept": "application/json",
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(timeout),
        )

    # ── Context manager ──────────────────────────────────────────────

    async def __aenter__(self) -> SimulatorClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ── JSON-RPC primitive ───────────────────────────────────────────

    async def _call(self, method: str, params: dict[str, Any]) -> Any:
        """Invoke a JSON-RPC method with retry on transport errors and 5xx."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        last_exc: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                resp = await self._client.post(self.rpc_url, json=payload)
            except httpx.RequestError as exc:
                last_exc = exc
                logger.warning(
                    "Simulator request failed (attempt %d/%d): %s",
                    attempt + 1, self._max_retries, exc,
                    extra={"rpc_url": self.rpc_url, "attempt": attempt + 1},
                )
                if attempt < self._max_retries - 1:
                    await asyncio.sleep(2 ** attempt)
                continue

            if resp.status_code >= 500 and attempt < self._max_retries - 1:
                logger.warning(
                    "Simulator returned HTTP %d, retrying", resp.status_code,
                    extra={"rpc_url": self.rpc_url, "attempt": attempt + 1},
                )
                await asyncio.sleep(2 ** attempt)
                continue

            if resp.status_code >= 400:
                raise SimulatorError(
                    f"Simulator returned HTTP {resp.status_code}",
                    status_code=resp.status_code,
                )

            try:
                body = resp.json()
            except ValueError as exc:
                raise InvalidResponseError(
                    "Simulator returned a non-JSON body",
                    status_code=resp.status_code,
                ) from exc

            return _unwrap_envelope(body)

        raise SimulatorError(f"Request failed after {self._max_retries} attempts: {last_exc}")

    # ── Simulation ───────────────────────────────────────────────────

    async def simulate(
        self,
        tx_hash: str,
        *,
        timestamp: int = 0,
        window: int = 0,
    ) -> SimulationResponse:
        """Simulate a transaction and return its categorized events.

        Args:
            tx_hash: Hash of the transaction to replay
            timestamp: Ledger header timestamp override (Unix epoch); 0 = none
            window: Time window in seconds for a range simulation; 0 = none

        Raises:
            SimulatorError: On transport, HTTP, RPC or payload failures
        """
        params: dict[str, Any] = {"hash": tx_hash}
        if timestamp > 0:
            params["ledger_timestamp"] = timestamp
        if window > 0:
            params["window"] = window

        logger.info("Simulating transaction", extra={"tx_hash": tx_hash, "rpc_url": self.rpc_url})
        result = await self._call("simulateTransaction", params)
        if result is None:
            raise InvalidResponseError("Simulator returned an empty result")
        return parse_simulation_response(result)
