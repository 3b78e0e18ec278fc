"""
Progress Engine Configuration

Loads environment variables and provides configuration settings.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env.local first (for local development), then .env as fallback
env_local = Path.cwd() / '.env.local'
env_file = Path.cwd() / '.env'

if env_local.exists():
    load_dotenv(env_local)
elif env_file.exists():
    load_dotenv(env_file)

# Gemini API Key
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

if not GEMINI_API_KEY:
    logger.warning(
        "GEMINI_API_KEY not found. Set it in .env.local "
        "(key from https://aistudio.google.com/) before creating a ProgressTracker."
    )

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-lite")

# Local history store
PROGRESS_STORE_DIR = os.getenv("PROGRESS_STORE_DIR", ".progress_store")
STORAGE_KEY = "therapy-progress"
HISTORY_LIMIT = 50  # sessions kept, oldest dropped first

# Retry policy for model calls and store writes
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 1.0

# Speaker label for assistant turns in prompts
ASSISTANT_LABEL = "Dr. Sky"

ENGAGEMENT_DIMENSIONS = [
    "participation",
    "emotional_depth",
    "self_reflection",
    "progress",
    "openness",
]
