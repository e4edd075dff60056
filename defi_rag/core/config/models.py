from __future__ import annotations

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    model: str = "gpt-4o-mini"
    temperature: float = 0.2


class MarketDataConfig(BaseModel):
    base_url: str = "https://api.llama.fi"
    yields_base_url: str = "https://yields.llama.fi"
    timeout_seconds: float = 30.0


class ContextLimits(BaseModel):
    """Caps on how many records reach the answer prompt."""

    top_protocols: int = Field(default=5, ge=1)
    yields: int = Field(default=3, ge=1)


class AssistantConfig(BaseModel):
    assistant_id: str
    assistant_name: str
    env_file_path: str = ".env"
    port: int = 8000
    llm: LLMConfig = Field(default_factory=LLMConfig)
    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)
    context: ContextLimits = Field(default_factory=ContextLimits)
