import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ":memory:" keeps the asset store for the lifetime of the process only
DATABASE_PATH = os.getenv("DATABASE_PATH", ":memory:")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
_log_dir = os.getenv("LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))
# An empty LOG_DIR turns file logging off
LOG_DIR = Path(_log_dir) if _log_dir else None

SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:9002").split(",")
    if origin.strip()
]
