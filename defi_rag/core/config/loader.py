import json
from pathlib import Path

from defi_rag.core.config.env import load_env_from_path
from defi_rag.core.config.models import AssistantConfig
from defi_rag.core.exceptions import ConfigError


def load_assistant_config(config_path: str | Path, project_root: Path | None = None) -> AssistantConfig:
    root = project_root or Path.cwd()
    path = Path(config_path) if not isinstance(config_path, Path) else config_path
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    try:
        config = AssistantConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid config schema in {path}: {e}") from e
    load_env_from_path(config.env_file_path, root)
    return config
