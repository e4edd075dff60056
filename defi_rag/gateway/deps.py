from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from fastapi import Depends
from langchain_openai import ChatOpenAI

from defi_rag.core.config.loader import load_assistant_config
from defi_rag.core.config.models import AssistantConfig
from defi_rag.market_data.factory import build_market_client
from defi_rag.pipeline.chain import AssistantPipeline
from defi_rag.pipeline.memory import ConversationMemory

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_CONFIG: AssistantConfig | None = None
_PIPELINE: AssistantPipeline | None = None


def get_config_path() -> str:
    return os.environ.get("CONFIG_PATH", "config/assistant.json")


def get_config() -> AssistantConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_assistant_config(get_config_path(), project_root=PROJECT_ROOT)
    return _CONFIG


def get_pipeline() -> AssistantPipeline:
    """Build the pipeline on first use; ChatOpenAI needs OPENAI_API_KEY at construction."""
    global _PIPELINE
    if _PIPELINE is None:
        config = get_config()
        llm = ChatOpenAI(model=config.llm.model, temperature=config.llm.temperature)
        _PIPELINE = AssistantPipeline(
            llm=llm,
            client=build_market_client(config),
            memory=ConversationMemory(),
            limits=config.context,
        )
    return _PIPELINE


def get_memory(pipeline: AssistantPipeline = Depends(get_pipeline)) -> ConversationMemory:
    return pipeline.memory


def get_pipeline_provider() -> Callable[[], AssistantPipeline]:
    """The chat route builds the pipeline itself so construction errors get the failure payload."""
    return get_pipeline
