"""Shared enums and types used across erst."""

from __future__ import annotations

import enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ── Enums ────────────────────────────────────────────────────────────────────


class EventType(str, enum.Enum):
    """Event tags emitted by the simulator's event categorizer.

    The vocabulary is open: events carry the raw tag as a string, so tags
    not listed here are still accepted.
    """

    STORAGE_WRITE = "storage_write"
    STORAGE_READ = "storage_read"
    REQUIRE_AUTH = "require_auth"
    CONTRACT_CALL = "contract_call"
    EVENT_EMIT = "event_emit"
    HOST_FN = "host_fn"
    DIAGNOSTIC = "diagnostic"


# ── Simulation Schemas ───────────────────────────────────────────────────────


class CategorizedEvent(BaseModel):
    """A single execution event observed during simulation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    contract_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("contract_id", "contractId", "ContractID"),
    )
    event_type: str = Field(
        validation_alias=AliasChoices("event_type", "eventType", "EventType", "type"),
    )

    @field_validator("contract_id", mode="before")
    @classmethod
    def _blank_contract_is_absent(cls, value: object) -> object:
        # "" and whitespace-only ids mean no contract
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("event_type", mode="before")
    @classmethod
    def _enum_to_tag(cls, value: object) -> object:
        if isinstance(value, enum.Enum):
            return value.value
        return value

    @property
    def is_attributed(self) -> bool:
        return self.contract_id is not None


class SimulationResponse(BaseModel):
    """Result of dry-running a transaction against a ledger snapshot."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    categorized_events: list[CategorizedEvent] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "categorized_events", "categorizedEvents", "CategorizedEvents"
        ),
    )

    @field_validator("categorized_events", mode="before")
    @classmethod
    def _null_events_is_empty(cls, value: object) -> object:
        return [] if value is None else value
