"""
Configuration from environment variables

Loads .env.local (local dev, highest priority) or .env from the project root,
then reads settings with os.getenv. System environment variables are used
when neither file exists.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

env_local = PROJECT_ROOT / ".env.local"
env_file = PROJECT_ROOT / ".env"

if env_local.exists():
    load_dotenv(env_local)
elif env_file.exists():
    load_dotenv(env_file)

APP_VERSION = "0.1.0"

INDEX_PATH = os.getenv("INDEX_PATH", "index.json")
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "6969"))
STATIC_DIR = os.getenv("STATIC_DIR", str(PROJECT_ROOT / "static"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "logs/docsearch.log")

# Default number of results printed by the CLI
RESULT_LIMIT = int(os.getenv("RESULT_LIMIT", "10"))

DEFAULT_ADDRESS = f"{HOST}:{PORT}"
