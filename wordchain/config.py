import os

from .logging_config import get_logger

logger = get_logger(__name__)

# Environment
WORDCHAIN_ENV = os.getenv("WORDCHAIN_ENV", "development")
LOG_LEVEL = os.getenv("WORDCHAIN_LOG_LEVEL", "INFO")

# Game
TURN_SECONDS = int(os.getenv("WORDCHAIN_TURN_SECONDS", 10))
TICK_INTERVAL = float(os.getenv("WORDCHAIN_TICK_INTERVAL", 1.0))
# Off when clients send their own ticks to POST /tick
AUTO_TICK = os.getenv("WORDCHAIN_AUTO_TICK", "true").lower() in ("1", "true", "yes")

# Sessions
SESSION_MAX_AGE = int(os.getenv("WORDCHAIN_SESSION_MAX_AGE", 3600))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

if TURN_SECONDS < 1:
    logger.warning(f"WORDCHAIN_TURN_SECONDS={TURN_SECONDS} is invalid, using 10")
    TURN_SECONDS = 10
