"""Per-session conversation memory, kept for the lifetime of the process."""
from __future__ import annotations

import threading
import uuid

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.messages import BaseMessage

DEFAULT_SESSION = "default"


class ConversationMemory:
    def __init__(self):
        self._sessions: dict[str, InMemoryChatMessageHistory] = {}
        self._lock = threading.Lock()

    def create_session(self, session_id: str | None = None) -> str:
        sid = session_id or str(uuid.uuid4())
        with self._lock:
            self._sessions.setdefault(sid, InMemoryChatMessageHistory())
        return sid

    def record(self, session_id: str | None, input_text: str, output_text: str) -> None:
        sid = session_id or DEFAULT_SESSION
        with self._lock:
            history = self._sessions.setdefault(sid, InMemoryChatMessageHistory())
            history.add_user_message(input_text)
            history.add_ai_message(output_text)

    def messages(self, session_id: str | None) -> list[BaseMessage]:
        with self._lock:
            history = self._sessions.get(session_id or DEFAULT_SESSION)
            return list(history.messages) if history else []

    def evict(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
