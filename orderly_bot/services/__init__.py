"""
Services Package for Orderly Bot
================================

This package contains service modules that sit between the HTTP routes and
the conversation engine.

Available Services:
-------------------
- **session**: In-memory registry of chat sessions, one ConversationEngine each

Usage:
------
    from orderly_bot.services.session import create_session, get_session
"""
