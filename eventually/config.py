import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# File-backed SQLite store, created on first start.
DATABASE_PATH = os.getenv("EVENTUALLY_DB_PATH", "./data/eventually.db")
DB_POOL_SIZE = int(os.getenv("EVENTUALLY_DB_POOL_SIZE", "5"))
DB_POOL_TIMEOUT = float(os.getenv("EVENTUALLY_DB_POOL_TIMEOUT", "30"))
# Seconds a writer waits for another writer's lock before failing.
DB_BUSY_TIMEOUT = float(os.getenv("EVENTUALLY_DB_BUSY_TIMEOUT", "30"))

# --- Logging ---
LOG_LEVEL = os.getenv("EVENTUALLY_LOG_LEVEL", "INFO").upper()

# --- Server (desktop shell talks to us over loopback) ---
HOST = os.getenv("EVENTUALLY_HOST", "127.0.0.1")
PORT = int(os.getenv("EVENTUALLY_PORT", "8000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("EVENTUALLY_CORS_ORIGINS", "*").split(",") if o.strip()]
