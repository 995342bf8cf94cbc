#!/usr/bin/env python3
"""
Development server launcher for the checkout API.

Usage:
    python scripts/run_server.py [--host HOST] [--port PORT] [--reload]
"""

import sys
import argparse
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from app.core.config import settings


def main():
    parser = argparse.ArgumentParser(description="Run the checkout API")
    parser.add_argument("--host", default=settings.APP_HOST, help="bind address")
    parser.add_argument("--port", type=int, default=settings.APP_PORT, help="listening port")
    parser.add_argument("--reload", action="store_true", help="reload on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
