from defi_rag.core.contracts.gateway import ChatRequest, ChatResponse, ChatTurn, SessionResponse
from defi_rag.core.contracts.market import ChainRecord, FetchedDataSet, ProtocolRecord, YieldRecord
from defi_rag.core.contracts.query import Intent, QueryDescriptor

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "SessionResponse",
    "ChainRecord",
    "FetchedDataSet",
    "ProtocolRecord",
    "YieldRecord",
    "Intent",
    "QueryDescriptor",
]
