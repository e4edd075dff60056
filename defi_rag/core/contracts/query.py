from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Intent(str, Enum):
    PROTOCOL_INFO = "protocol_info"
    TVL_CHECK = "tvl_check"
    YIELD_INFO = "yield_info"
    COMPARISON = "comparison"
    CHAIN_INFO = "chain_info"
    GENERAL_QUESTION = "general_question"


class QueryDescriptor(BaseModel):
    """Intent and entities extracted from one user question."""

    model_config = ConfigDict(frozen=True)

    intent: Intent
    protocols: list[str]
    chains: list[str]
    metrics: list[str]

    @field_validator("protocols", "chains", "metrics")
    @classmethod
    def _lowercase(cls, values: list[str]) -> list[str]:
        return [v.strip().lower() for v in values]

    @classmethod
    def default(cls) -> "QueryDescriptor":
        return cls(intent=Intent.GENERAL_QUESTION, protocols=[], chains=[], metrics=[])

    def wants_yields(self) -> bool:
        return "yield" in self.metrics or "apy" in self.metrics
