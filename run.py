#!/usr/bin/env python3
"""
ActionOrder - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--log-level LEVEL]
"""

import argparse
import uvicorn

from actionorder.core.rules import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_LOG_LEVEL


def main():
    parser = argparse.ArgumentParser(description="ActionOrder Server")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Host to bind to")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, help="Logging level")
    args = parser.parse_args()

    uvicorn.run(
        "actionorder.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
