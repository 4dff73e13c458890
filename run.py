#!/usr/bin/env python3
"""
Hold'em Engine - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--players N] [--stack CHIPS]
                  [--small-blind N] [--big-blind N] [--ai-delay SECONDS]
                  [--all-ai] [--no-hints]
"""

import argparse
import uvicorn

from holdem.core.rules import (
    AI_THINK_SECONDS, BIG_BLIND, HUMAN_SEAT, PLAYER_COUNT, SMALL_BLIND,
    STARTING_STACK, TableConfig,
)
from holdem.server.app import create_app


def main():
    parser = argparse.ArgumentParser(description="Hold'em Engine Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--players", type=int, default=PLAYER_COUNT, help="Seats at the table")
    parser.add_argument("--stack", type=int, default=STARTING_STACK, help="Starting stack per seat")
    parser.add_argument("--small-blind", type=int, default=SMALL_BLIND, help="Small blind")
    parser.add_argument("--big-blind", type=int, default=BIG_BLIND, help="Big blind")
    parser.add_argument("--ai-delay", type=float, default=AI_THINK_SECONDS,
                        help="Seconds an AI seat waits before acting")
    parser.add_argument("--all-ai", action="store_true", help="No human seat")
    parser.add_argument("--no-hints", action="store_true", help="Disable win probability hints")
    args = parser.parse_args()

    try:
        config = TableConfig(
            player_count=args.players,
            starting_stack=args.stack,
            small_blind=args.small_blind,
            big_blind=args.big_blind,
            human_seat=None if args.all_ai else HUMAN_SEAT,
            ai_delay=args.ai_delay,
            equity_hints=not args.no_hints,
        )
    except ValueError as e:
        parser.error(str(e))

    uvicorn.run(
        create_app(config),
        host=args.host,
        port=args.port,
    )


if __name__ == "__main__":
    main()
