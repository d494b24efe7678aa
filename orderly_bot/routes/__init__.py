"""
Routes Package for Orderly Bot
==============================

API route definitions. Each module defines a FastAPI APIRouter.

- chat.py: Chat session, messaging and transcript endpoints

Router Registration:
--------------------
Routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 404: Unknown or expired session
- 409: Previous message still waiting on the order service
- 422: Invalid request body (empty or over-long message)
"""

from .chat import chat_router

__all__ = ["chat_router"]
