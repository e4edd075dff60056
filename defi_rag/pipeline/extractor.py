"""Classify a DeFi question into a QueryDescriptor using the LLM."""
from __future__ import annotations

import json
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from defi_rag.core.contracts.query import QueryDescriptor

log = logging.getLogger("extractor")


PROMPT = """Extract information from this DeFi query: "{query}"

Return as JSON with these fields:
- intent: One of [protocol_info, tvl_check, yield_info, comparison, chain_info, general_question]
- protocols: Array of protocol names mentioned (lowercase, e.g. ["aave", "compound"])
- chains: Array of blockchain names mentioned (lowercase, e.g. ["ethereum", "polygon"])
- metrics: Array of metrics mentioned (e.g. ["tvl", "yield", "apy"])

Return ONLY valid JSON, no explanations."""


def _strip_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("```")[1]
        if text.startswith("json"):
            text = text[4:]
    return text.strip()


def parse_query_details(text: str) -> QueryDescriptor:
    """Parse model output into a descriptor; anything unusable yields the default descriptor."""
    try:
        data = json.loads(_strip_fence(text))
        return QueryDescriptor.model_validate(data)
    # JSONDecodeError is a ValueError; so are oversized integer literals
    except (ValueError, RecursionError, ValidationError, IndexError) as e:
        log.warning("Unparseable extraction output, using default descriptor: %s", e)
        return QueryDescriptor.default()


async def extract_query_details(query: str, llm: BaseChatModel) -> QueryDescriptor:
    prompt = ChatPromptTemplate.from_messages([("human", PROMPT)])
    try:
        out = await (prompt | llm).ainvoke({"query": query})
    except Exception as e:
        log.warning("Extraction call failed, using default descriptor: %s", e)
        return QueryDescriptor.default()
    text = out.content if hasattr(out, "content") else str(out)
    if not isinstance(text, str):
        text = str(text)
    descriptor = parse_query_details(text)
    log.info(
        "intent=%s protocols=%s chains=%s metrics=%s",
        descriptor.intent.value,
        descriptor.protocols,
        descriptor.chains,
        descriptor.metrics,
    )
    return descriptor
