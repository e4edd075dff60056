import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from pydantic import Field

from defi_rag.core.contracts.market import ChainRecord, ProtocolRecord, YieldRecord
from defi_rag.gateway.deps import get_pipeline, get_pipeline_provider
from defi_rag.gateway.main import app
from defi_rag.pipeline.chain import AssistantPipeline
from defi_rag.pipeline.memory import ConversationMemory


class RecordingChatModel(FakeListChatModel):
    """Fake chat model that keeps the rendered prompt of every call."""

    seen_prompts: list[str] = Field(default_factory=list)

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self.seen_prompts.append("\n".join(str(m.content) for m in messages))
        return super()._call(messages, stop=stop, run_manager=run_manager, **kwargs)


class FailingChatModel(FakeListChatModel):
    responses: list[str] = Field(default_factory=lambda: [""])

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        raise RuntimeError("model unavailable")


PROTOCOLS = {
    "aave": ProtocolRecord(name="Aave", tvl=12345678.9, chain="Ethereum", category="Lending"),
    "compound": ProtocolRecord(name="Compound", tvl=2500000, category="Lending"),
}

YIELDS = [
    YieldRecord(project="aave-v3", chain="Ethereum", pool="aave-usdc", apy=4.123, tvlUsd=1000),
    YieldRecord(project="aave", chain="Ethereum", pool="aave-eth", apy=2.5, tvlUsd=2000),
    YieldRecord(project="compound", chain="Ethereum", pool="comp-usdc", apy=3.0, tvlUsd=3000),
    YieldRecord(project="Compound", chain="Arbitrum", pool="comp-arb", apy=5.555, tvlUsd=4000),
]

TOP = [ProtocolRecord(name=f"P{i}", tvl=float(1000 * (10 - i))) for i in range(8)]

CHAINS = [ChainRecord(name="Ethereum", tvl=5e10, tokenSymbol="ETH"), ChainRecord(name="Polygon", tvl=1e9)]


class FakeMarketClient:
    """In-memory stand-in for DefiLlamaClient that records every call."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, ...]] = []

    def _maybe_fail(self):
        if self.fail:
            raise TimeoutError("provider timed out")

    async def get_protocol(self, identifier):
        self.calls.append(("get_protocol", identifier))
        self._maybe_fail()
        return PROTOCOLS.get(identifier)

    async def list_protocols(self):
        self.calls.append(("list_protocols",))
        self._maybe_fail()
        return list(TOP)

    async def list_yields(self):
        self.calls.append(("list_yields",))
        self._maybe_fail()
        return list(YIELDS)

    async def list_chains(self):
        self.calls.append(("list_chains",))
        self._maybe_fail()
        return list(CHAINS)

    async def get_protocol_yields(self, identifier):
        self.calls.append(("get_protocol_yields", identifier))
        self._maybe_fail()
        return [y for y in YIELDS if y.project.lower() == identifier.lower()]


@pytest.fixture
def market_client():
    return FakeMarketClient()


@pytest.fixture
def memory():
    return ConversationMemory()


@pytest_asyncio.fixture(scope="function")
async def api_client():
    """Yields (client, set_pipeline); set_pipeline installs the pipeline the app should use."""
    holder = {}

    def set_pipeline(pipeline: AssistantPipeline):
        holder["pipeline"] = pipeline
        app.dependency_overrides[get_pipeline] = lambda: holder["pipeline"]
        app.dependency_overrides[get_pipeline_provider] = lambda: (lambda: holder["pipeline"])

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac, set_pipeline

    app.dependency_overrides.clear()
