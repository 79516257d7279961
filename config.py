"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "users")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv("DATABASE_URL") or (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# Seconds to wait for the server before giving up on a connection.
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))

# ── Connection pool ───────────────────────────────────────
POOL_MIN_CONN: int = int(os.getenv("POOL_MIN_CONN", "1"))
POOL_MAX_CONN: int = int(os.getenv("POOL_MAX_CONN", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Examples ──────────────────────────────────────────────
# Insert / update / delete examples modify the info table.
RUN_MUTATION_EXAMPLES: bool = _env_flag("RUN_MUTATION_EXAMPLES")
# Transaction, join and stored procedure examples.
RUN_ADVANCED_EXAMPLES: bool = _env_flag("RUN_ADVANCED_EXAMPLES")
