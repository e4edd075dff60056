import json
import os

import pytest

from defi_rag.core.config.loader import load_assistant_config
from defi_rag.core.exceptions import ConfigError
from defi_rag.gateway.deps import PROJECT_ROOT
from defi_rag.market_data.factory import build_market_client


def test_loads_repo_config():
    config = load_assistant_config("config/assistant.json", project_root=PROJECT_ROOT)
    assert config.assistant_id == "defi"
    assert config.context.top_protocols == 5
    assert config.context.yields == 3


def test_defaults_and_client_factory(tmp_path):
    (tmp_path / "c.json").write_text(json.dumps({
        "assistant_id": "x",
        "assistant_name": "X",
        "market_data": {"base_url": "http://llama.local/", "timeout_seconds": 5},
    }))
    config = load_assistant_config("c.json", project_root=tmp_path)
    assert config.llm.model == "gpt-4o-mini"
    client = build_market_client(config)
    assert client.base_url == "http://llama.local"
    assert client.timeout == 5


def test_env_file_does_not_override(tmp_path, monkeypatch):
    monkeypatch.setenv("DEFI_RAG_TEST_VAR", "from-env")
    monkeypatch.delenv("DEFI_RAG_ONLY_IN_FILE", raising=False)
    (tmp_path / ".env").write_text("DEFI_RAG_TEST_VAR=from-file\nDEFI_RAG_ONLY_IN_FILE=yes\n")
    (tmp_path / "c.json").write_text(json.dumps({"assistant_id": "x", "assistant_name": "X", "env_file_path": ".env"}))
    load_assistant_config("c.json", project_root=tmp_path)
    assert os.environ["DEFI_RAG_TEST_VAR"] == "from-env"
    assert os.environ["DEFI_RAG_ONLY_IN_FILE"] == "yes"
    monkeypatch.delenv("DEFI_RAG_ONLY_IN_FILE")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"assistant_name": "missing id"}),
        json.dumps({"assistant_id": "x", "assistant_name": "X", "context": {"yields": 0}}),
    ],
)
def test_bad_config_raises(tmp_path, content):
    (tmp_path / "c.json").write_text(content)
    with pytest.raises(ConfigError):
        load_assistant_config("c.json", project_root=tmp_path)


def test_missing_config_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_assistant_config("nope.json", project_root=tmp_path)
