"""Produce the final answer from the formatted context using LLM."""
from __future__ import annotations

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from defi_rag.core.contracts.gateway import ChatTurn
from defi_rag.pipeline.memory import ConversationMemory

log = logging.getLogger("generator")


PROMPT = """You are a DeFi expert assistant. Answer the user's question based on this context:

{context}

User question: {query}

Answer in a concise, helpful way. If you don't have enough data to answer accurately, acknowledge that and provide general information instead. Use numbers and percentages when available, exactly as they appear in the context.

Response:"""

_ROLES = {"user": "human", "assistant": "ai"}


def history_messages(history: list[ChatTurn]) -> list[tuple[str, str]]:
    return [(_ROLES[turn.role], turn.content) for turn in history]


async def generate_answer(
    context: str,
    query: str,
    history: list[ChatTurn],
    llm: BaseChatModel,
    memory: ConversationMemory,
    session_id: str | None = None,
) -> str:
    prompt = ChatPromptTemplate.from_messages([
        MessagesPlaceholder(variable_name="history", optional=True),
        ("human", PROMPT),
    ])
    # The context, not the answer, is what gets remembered for this turn.
    memory.record(session_id, query, context)
    out = await (prompt | llm).ainvoke({
        "context": context,
        "query": query,
        "history": history_messages(history),
    })
    return out.content if hasattr(out, "content") else str(out)
