#!/usr/bin/env python3
"""
Startup script for the Orderly Bot API.

Usage:
    # Run on the default port
    python run_server.py

    # Run with custom port
    python run_server.py --port 8001

    # Run with reload for development
    python run_server.py --reload
"""

import argparse
import os


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """Run the application with uvicorn."""
    interpret_url = os.getenv("ORDER_INTERPRET_URL", "")

    print(f"\n{'=' * 50}")
    print("Starting: Orderly Bot")
    print(f"Port:     {port}")
    print(f"Orders:   {interpret_url or 'NOT CONFIGURED (set ORDER_INTERPRET_URL)'}")
    print(f"{'=' * 50}\n")

    import uvicorn

    uvicorn.run(
        "orderly_bot.main:app",
        host=host,
        port=port,
        reload=reload,
    )


def main():
    parser = argparse.ArgumentParser(description="Run the Orderly Bot API")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to run on (default: $PORT or 8000)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()
    run_server(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
