from defi_rag.core.config.loader import load_assistant_config
from defi_rag.core.config.models import AssistantConfig, ContextLimits, LLMConfig, MarketDataConfig
from defi_rag.core.exceptions import ConfigError, PipelineError

__all__ = [
    "load_assistant_config",
    "AssistantConfig",
    "ContextLimits",
    "LLMConfig",
    "MarketDataConfig",
    "ConfigError",
    "PipelineError",
]
