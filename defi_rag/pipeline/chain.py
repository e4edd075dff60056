"""Four-stage RAG pipeline: extract -> fetch -> format -> answer."""
from __future__ import annotations

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import RunnableLambda, RunnableSequence

from defi_rag.core.config.models import ContextLimits
from defi_rag.core.contracts.gateway import ChatTurn
from defi_rag.core.exceptions import PipelineError
from defi_rag.pipeline.extractor import extract_query_details
from defi_rag.pipeline.fetcher import MarketDataClient, fetch_relevant_data
from defi_rag.pipeline.formatter import format_context
from defi_rag.pipeline.generator import generate_answer
from defi_rag.pipeline.memory import ConversationMemory

log = logging.getLogger("pipeline")


def _preview(text: str, n: int) -> str:
    return (text[:n] + "…") if len(text) > n else text


class AssistantPipeline:
    def __init__(
        self,
        llm: BaseChatModel,
        client: MarketDataClient,
        memory: ConversationMemory | None = None,
        limits: ContextLimits | None = None,
    ):
        self.llm = llm
        self.client = client
        self.memory = memory if memory is not None else ConversationMemory()
        self.limits = limits or ContextLimits()
        self.chain: RunnableSequence = (
            RunnableLambda(self._extract)
            | RunnableLambda(self._retrieve)
            | RunnableLambda(self._answer)
        )

    async def _extract(self, state: dict[str, Any]) -> dict[str, Any]:
        descriptor = await extract_query_details(state["query"], self.llm)
        return {**state, "descriptor": descriptor}

    async def _retrieve(self, state: dict[str, Any]) -> dict[str, Any]:
        data = await fetch_relevant_data(state["descriptor"], self.client, self.limits)
        context = format_context(state["descriptor"], data, self.limits)
        log.info("CONTEXT: %s", _preview(context.replace("\n", " | "), 200))
        return {**state, "context": context}

    async def _answer(self, state: dict[str, Any]) -> dict[str, Any]:
        try:
            result = await generate_answer(
                state["context"],
                state["query"],
                state["history"],
                self.llm,
                self.memory,
                state.get("session_id"),
            )
        except Exception as e:
            raise PipelineError(f"Answer generation failed: {e}") from e
        return {**state, "result": result}

    async def run(self, query: str, history: list[ChatTurn] | None = None, session_id: str | None = None) -> str:
        log.info("QUERY: %s", _preview(query, 200))
        out = await self.chain.ainvoke({"query": query, "history": history or [], "session_id": session_id})
        log.info("ANSWER: %s", _preview(out["result"], 300) if out["result"] else "(empty)")
        return out["result"]
