"""Gateway FastAPI app: POST /api/chat -> extract, fetch, format, answer."""
from __future__ import annotations

import logging
import os
from typing import Callable

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from defi_rag.gateway.deps import get_config, get_memory, get_pipeline_provider

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
log = logging.getLogger("gateway")

from defi_rag.core.contracts.gateway import ChatRequest, ChatResponse, SessionResponse
from defi_rag.pipeline.chain import AssistantPipeline
from defi_rag.pipeline.memory import ConversationMemory

app = FastAPI(title="DeFi RAG Assistant")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    get_config()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(request: Request, pipeline_provider: Callable[[], AssistantPipeline] = Depends(get_pipeline_provider)):
    # Body parsing and pipeline construction errors also answer with the failure payload
    try:
        req = ChatRequest.model_validate_json(await request.body())
        pipeline = pipeline_provider()
        answer = await pipeline.run(req.message, req.history, session_id=req.session_id)
    except Exception as e:
        log.exception("Chat request failed")
        body = ChatResponse(success=False, error="Failed to process query", details=str(e))
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
    return ChatResponse(success=True, response=answer, session_id=req.session_id)


@app.post("/api/sessions", response_model=SessionResponse)
def create_session(memory: ConversationMemory = Depends(get_memory)):
    return SessionResponse(session_id=memory.create_session())


@app.get("/api/sessions/{session_id}/memory")
def get_session_memory(session_id: str, memory: ConversationMemory = Depends(get_memory)):
    if session_id not in memory:
        raise HTTPException(status_code=404, detail="Session not found")
    roles = {"human": "user", "ai": "assistant"}
    return {
        "session_id": session_id,
        "turns": [{"role": roles.get(m.type, m.type), "content": m.content} for m in memory.messages(session_id)],
    }


@app.delete("/api/sessions/{session_id}")
def evict_session(session_id: str, memory: ConversationMemory = Depends(get_memory)):
    return {"session_id": session_id, "evicted": memory.evict(session_id)}


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", str(get_config().port)))
    uvicorn.run(app, host="0.0.0.0", port=port)
