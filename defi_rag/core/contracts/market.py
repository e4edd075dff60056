from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProtocolRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    description: str | None = None
    tvl: float | None = None
    chain: str | None = None
    current_chain_tvls: dict[str, float] = Field(default_factory=dict, alias="currentChainTvls")
    chains: list[str] = Field(default_factory=list)
    category: str | None = None
    url: str | None = None

    @field_validator("tvl", mode="before")
    @classmethod
    def _latest_tvl(cls, value: Any) -> Any:
        # /protocol/{slug} returns the TVL history; keep the most recent point
        if isinstance(value, list):
            if not value:
                return None
            last = value[-1]
            return last.get("totalLiquidityUSD") if isinstance(last, dict) else last
        return value


class YieldRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project: str
    chain: str | None = None
    pool: str
    apy: float
    tvl_usd: float | None = Field(default=None, alias="tvlUsd")
    pool_meta: str | None = Field(default=None, alias="poolMeta")


class ChainRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    tvl: float | None = None
    token_symbol: str | None = Field(default=None, alias="tokenSymbol")
    cmc_id: str | int | None = Field(default=None, alias="cmcId")
    chain_id: str | int | None = Field(default=None, alias="chainId")


class FetchedDataSet(BaseModel):
    protocols_data: dict[str, ProtocolRecord | None] = Field(default_factory=dict)
    top_protocols: list[ProtocolRecord] = Field(default_factory=list)
    chains_data: list[ChainRecord] = Field(default_factory=list)
    yields_data: list[YieldRecord] = Field(default_factory=list)
