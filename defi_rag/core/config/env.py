from pathlib import Path

from dotenv import load_dotenv


def load_env_from_path(env_file_path: str | None, project_root: Path | None = None) -> bool:
    """Load a .env file relative to project_root. Existing variables win. Returns True if a file was read."""
    if not env_file_path:
        return False
    root = project_root or Path.cwd()
    path = root / env_file_path
    if path.exists():
        return load_dotenv(path, override=False)
    return False
