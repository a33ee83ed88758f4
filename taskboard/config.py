from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from repo root and package parent .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path.cwd() / ".env")

# "json" keeps the whole store in one document file, "sql" uses an embedded database.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json").strip().lower()
DB_FILE = os.getenv("DB_FILE", "./db.json")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

_cors_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

FRONTEND_DIR = os.getenv("FRONTEND_DIR", "./dist")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
