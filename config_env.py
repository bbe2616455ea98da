# Configuration from environment variables (.env or deployment Variables).

import os
from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_flag(key: str, default: str = "false") -> bool:
    return _env(key, default).lower() in ("1", "true", "yes")


# ============================================================================
# Database
# ============================================================================
# DATABASE_URL may be a plain postgres:// URL; backend.database rewrites it
# for asyncpg. Without it the service falls back to a local SQLite file.
DATABASE_URL = _env("DATABASE_URL")
DATABASE_URL_FALLBACK = _env("DATABASE_URL_FALLBACK", "sqlite+aiosqlite:///./esg_compass.db")
DATABASE_ECHO = _env_flag("DATABASE_ECHO")

# Load the starter scheme catalog when the API boots
SEED_ON_STARTUP = _env_flag("SEED_ON_STARTUP", "true")

# ============================================================================
# LLM (OpenAI-compatible) -- ESG news explainer
# ============================================================================
LLM_API_KEY = _env("OPENAI_API_KEY", _env("LLM_API_KEY"))
LLM_BASE_URL = _env("LLM_BASE_URL") or None
ESG_EXPLAIN_MODEL = _env("ESG_EXPLAIN_MODEL", "gpt-4o")
ESG_EXPLAIN_TEMPERATURE = float(_env("ESG_EXPLAIN_TEMPERATURE", "0.2"))
LLM_TIMEOUT = float(_env("LLM_TIMEOUT", "60"))

# ============================================================================
# Server
# ============================================================================
HOST = _env("HOST", "0.0.0.0")
PORT = int(_env("PORT", "8000"))
LOG_LEVEL = _env("LOG_LEVEL", "INFO").upper()
