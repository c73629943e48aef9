"""
Runtime configuration for the Connect Four web game.

Values come from environment variables; a local ``.env`` file is loaded first
if present.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


BOARD_HEIGHT = int(os.getenv("CONNECT4_HEIGHT", "6"))
BOARD_WIDTH = int(os.getenv("CONNECT4_WIDTH", "7"))

P1_COLOR = os.getenv("CONNECT4_P1_COLOR", "#ff0000")
P2_COLOR = os.getenv("CONNECT4_P2_COLOR", "#0000ff")

SECRET_KEY = os.getenv("CONNECT4_SECRET_KEY", "connect4_secret_key_change_in_production")
HOST = os.getenv("CONNECT4_HOST", "0.0.0.0")
PORT = int(os.getenv("CONNECT4_PORT", "5000"))
DEBUG = _env_bool("CONNECT4_DEBUG", False)

# Games kept in memory before the least recently used one is dropped
MAX_GAMES = int(os.getenv("CONNECT4_MAX_GAMES", "1000"))

LOG_LEVEL = os.getenv("CONNECT4_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach a console handler to the ``connect_four`` logger."""
    logger = logging.getLogger("connect_four")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(handler)

    return logger
