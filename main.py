"""Entry point for the voice tab navigator API."""

import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from utils.log_utils import tprint
from utils.settings_store import refresh_settings


def _load_env_files() -> None:
    """Load .env files from common locations (repo, home)."""
    candidates: list[Path] = []
    cwd = Path.cwd()
    candidates.extend([cwd / "env/.env", cwd / ".env"])

    module_root = Path(__file__).resolve().parent
    candidates.extend([module_root / "env/.env", module_root / ".env"])

    home = Path.home()
    candidates.append(home / ".voice-nav.env")

    for path in candidates:
        if path.exists():
            load_dotenv(dotenv_path=str(path), override=False)


def _is_enabled(name: str, default: bool = False) -> bool:
    """Read a boolean-like environment variable (1/0/true/false)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def bootstrap() -> int:
    """Load configuration and serve the API until interrupted."""
    _load_env_files()
    settings = refresh_settings()
    host = os.getenv("VOICE_NAV_HOST", "127.0.0.1")
    port = int(os.getenv("VOICE_NAV_PORT", "8000"))
    tprint(f"[MAIN] Starting API on {host}:{port} (log_level={settings.get('log_level')})")
    try:
        uvicorn.run(
            "api.server:app",
            host=host,
            port=port,
            reload=_is_enabled("VOICE_NAV_RELOAD"),
        )
    except KeyboardInterrupt:
        tprint("[MAIN] Received interrupt. Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(bootstrap())
