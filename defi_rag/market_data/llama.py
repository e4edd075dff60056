"""Async DefiLlama client. Every method degrades to None / [] instead of raising."""
from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from defi_rag.core.contracts.market import ChainRecord, ProtocolRecord, YieldRecord

log = logging.getLogger("llama")

DEFAULT_BASE_URL = "https://api.llama.fi"
DEFAULT_YIELDS_BASE_URL = "https://yields.llama.fi"

RecordT = TypeVar("RecordT", bound=BaseModel)


def _parse_records(payload: Any, model: type[RecordT]) -> list[RecordT]:
    # yields.llama.fi wraps rows as {"status": ..., "data": [...]}
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    if not isinstance(payload, list):
        return []
    records = []
    skipped = 0
    for item in payload:
        try:
            records.append(model.model_validate(item))
        except ValidationError:
            skipped += 1
    if skipped:
        log.debug("skipped %s malformed %s rows", skipped, model.__name__)
    return records


class DefiLlamaClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        yields_base_url: str = DEFAULT_YIELDS_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.yields_base_url = yields_base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, url: str) -> Any | None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(url)
            if r.status_code != 200:
                log.warning("GET %s: HTTP %s", url, r.status_code)
                return None
            return r.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning("GET %s failed: %s", url, e)
            return None

    async def get_protocol(self, identifier: str) -> ProtocolRecord | None:
        data = await self._get_json(f"{self.base_url}/protocol/{identifier}")
        if not isinstance(data, dict):
            return None
        try:
            return ProtocolRecord.model_validate(data)
        except ValidationError as e:
            log.warning("protocol %s: unexpected payload (%s)", identifier, e.error_count())
            return None

    async def list_protocols(self) -> list[ProtocolRecord]:
        return _parse_records(await self._get_json(f"{self.base_url}/protocols"), ProtocolRecord)

    async def list_yields(self) -> list[YieldRecord]:
        return _parse_records(await self._get_json(f"{self.yields_base_url}/pools"), YieldRecord)

    async def list_chains(self) -> list[ChainRecord]:
        return _parse_records(await self._get_json(f"{self.base_url}/chains"), ChainRecord)

    async def get_protocol_yields(self, identifier: str) -> list[YieldRecord]:
        wanted = identifier.lower()
        return [y for y in await self.list_yields() if y.project.lower() == wanted]
