"""Decide which market-data calls a descriptor needs and collect their results."""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from defi_rag.core.config.models import ContextLimits
from defi_rag.core.contracts.market import ChainRecord, FetchedDataSet, ProtocolRecord, YieldRecord
from defi_rag.core.contracts.query import Intent, QueryDescriptor

log = logging.getLogger("fetcher")

T = TypeVar("T")


class MarketDataClient(Protocol):
    async def get_protocol(self, identifier: str) -> ProtocolRecord | None: ...

    async def list_protocols(self) -> list[ProtocolRecord]: ...

    async def list_yields(self) -> list[YieldRecord]: ...

    async def list_chains(self) -> list[ChainRecord]: ...

    async def get_protocol_yields(self, identifier: str) -> list[YieldRecord]: ...


async def _call(label: str, fetch: Callable[[], Awaitable[T]], fallback: T) -> T:
    start = time.perf_counter()
    try:
        result = await fetch()
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        log.warning("← %s: failed %s (%s ms)", label, e, latency_ms)
        return fallback
    latency_ms = int((time.perf_counter() - start) * 1000)
    size: Any = len(result) if isinstance(result, list) else ("found" if result is not None else "none")
    log.info("← %s: %s (%s ms)", label, size, latency_ms)
    return result


async def fetch_relevant_data(
    descriptor: QueryDescriptor,
    client: MarketDataClient,
    limits: ContextLimits | None = None,
) -> FetchedDataSet:
    limits = limits or ContextLimits()
    data = FetchedDataSet()

    # Protocols run one at a time; yields_data is replaced each pass so the last protocol wins.
    for protocol in descriptor.protocols:
        data.protocols_data[protocol] = await _call(f"protocol {protocol}", lambda: client.get_protocol(protocol), None)
        if descriptor.wants_yields():
            data.yields_data = await _call(f"yields {protocol}", lambda: client.get_protocol_yields(protocol), [])

    if descriptor.intent == Intent.GENERAL_QUESTION or not descriptor.protocols:
        top = await _call("top protocols", client.list_protocols, [])
        data.top_protocols = top[: limits.top_protocols]

    if descriptor.chains or descriptor.intent == Intent.CHAIN_INFO:
        data.chains_data = await _call("chains", client.list_chains, [])

    return data
