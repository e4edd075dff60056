from __future__ import annotations

from defi_rag.core.config.models import AssistantConfig
from defi_rag.market_data.llama import DefiLlamaClient


def build_market_client(config: AssistantConfig) -> DefiLlamaClient:
    """Build the DefiLlama client from the market_data section of the config."""
    md = config.market_data
    return DefiLlamaClient(
        base_url=md.base_url,
        yields_base_url=md.yields_base_url,
        timeout=md.timeout_seconds,
    )
