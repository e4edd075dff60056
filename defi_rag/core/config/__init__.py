from defi_rag.core.config.loader import load_assistant_config
from defi_rag.core.config.models import AssistantConfig, ContextLimits, LLMConfig, MarketDataConfig
from defi_rag.core.config.env import load_env_from_path

__all__ = [
    "load_assistant_config",
    "AssistantConfig",
    "ContextLimits",
    "LLMConfig",
    "MarketDataConfig",
    "load_env_from_path",
]
