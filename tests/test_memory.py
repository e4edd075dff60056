from defi_rag.pipeline.memory import DEFAULT_SESSION, ConversationMemory


def test_record_without_session_uses_default(memory):
    memory.record(None, "q", "ctx")
    msgs = memory.messages(DEFAULT_SESSION)
    assert [m.type for m in msgs] == ["human", "ai"]
    assert [m.content for m in msgs] == ["q", "ctx"]


def test_sessions_are_isolated(memory):
    a = memory.create_session()
    b = memory.create_session()
    assert a != b
    memory.record(a, "question a", "context a")
    memory.record(b, "question b", "context b")
    assert [m.content for m in memory.messages(a)] == ["question a", "context a"]
    assert [m.content for m in memory.messages(b)] == ["question b", "context b"]


def test_evict(memory):
    sid = memory.create_session("chat-1")
    assert sid == "chat-1"
    memory.record(sid, "q", "c")
    assert memory.evict(sid) is True
    assert sid not in memory
    assert memory.messages(sid) == []
    assert memory.evict(sid) is False


def test_create_session_keeps_existing_history():
    memory = ConversationMemory()
    memory.record("s", "q", "c")
    memory.create_session("s")
    assert len(memory.messages("s")) == 2
    assert len(memory) == 1
