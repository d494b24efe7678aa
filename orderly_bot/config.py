"""
Configuration Module for Orderly Bot
====================================

This module centralizes the configuration settings, environment variables, and
constants used throughout the Orderly Bot application. By consolidating
configuration in one place, we achieve:

1. **Single Source of Truth**: All environment variables and defaults are defined
   here, making it easy to see what configuration options exist.

2. **Easy Environment Management**: Different environments (dev, staging, prod)
   can override settings via environment variables or a .env file without
   code changes.

3. **Type Safety**: Configuration values are parsed and typed at module load time,
   catching configuration errors early.

Configuration Categories:
-------------------------
- **Order Service**: Endpoints of the external order interpretation and
  confirmation webhooks, plus the request timeout applied to both.

- **Message Reveal**: Simulated typing delays applied before assistant
  messages appear in the transcript.

- **Session Management**: TTL and cache size settings for the in-memory session
  registry.

- **Input Validation**: Maximum lengths for user input.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for frontend
  integration. Defaults allow all origins for development.

Environment Variables:
----------------------
- ORDER_INTERPRET_URL: Webhook that interprets free-text orders (required for ordering)
- ORDER_CONFIRM_URL: Webhook that receives yes/no confirmations (default: ORDER_INTERPRET_URL)
- ORDER_SERVICE_TIMEOUT_SECONDS: Request timeout for both webhooks (default: 15)
- REVEAL_DELAY_SECONDS: Default typing delay for assistant messages (default: 1.0)
- FOLLOW_UP_DELAY_SECONDS: Delay for follow-up prompts (default: 0.5)
- GREETING_DELAY_SECONDS: Delay for the opening greeting (default: 0.5)
- SESSION_TTL_SECONDS: Session cache TTL (default: 3600)
- SESSION_MAX_CACHE_SIZE: Max cached sessions (default: 1000)
- MAX_MESSAGE_LENGTH: Max user message length (default: 2000)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from orderly_bot.config import (
        ORDER_INTERPRET_URL,
        SESSION_TTL_SECONDS,
        MAX_MESSAGE_LENGTH,
    )
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load .env from the project root (one level above orderly_bot/)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


# =============================================================================
# Order Service Configuration
# =============================================================================
# Both operations belong to one webhook family. The confirmation endpoint falls
# back to the interpretation endpoint when it is not configured separately.

ORDER_INTERPRET_URL: str = os.getenv("ORDER_INTERPRET_URL", "")
ORDER_CONFIRM_URL: str = os.getenv("ORDER_CONFIRM_URL", "") or ORDER_INTERPRET_URL

# Applied to every outbound request; the webhooks have no timeout of their own
ORDER_SERVICE_TIMEOUT_SECONDS: float = float(os.getenv("ORDER_SERVICE_TIMEOUT_SECONDS", "15"))


# =============================================================================
# Message Reveal Configuration
# =============================================================================
# Assistant messages are committed immediately but appear in the transcript
# only after a short "typing" delay.

REVEAL_DELAY_SECONDS: float = float(os.getenv("REVEAL_DELAY_SECONDS", "1.0"))
FOLLOW_UP_DELAY_SECONDS: float = float(os.getenv("FOLLOW_UP_DELAY_SECONDS", "0.5"))
GREETING_DELAY_SECONDS: float = float(os.getenv("GREETING_DELAY_SECONDS", "0.5"))


# =============================================================================
# Session Management Configuration
# =============================================================================
# Sessions live only in memory; evicted sessions cannot be restored.

# How long an idle session stays in the registry (seconds)
SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))  # 1 hour

# Maximum number of sessions to keep in memory
# When exceeded, oldest sessions (by last access) are evicted
SESSION_MAX_CACHE_SIZE: int = int(os.getenv("SESSION_MAX_CACHE_SIZE", "1000"))


# =============================================================================
# Input Validation Configuration
# =============================================================================

# Maximum allowed message length in characters
MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "2000"))


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://orderly.app,https://admin.orderly.app"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
