#!/usr/bin/env python3
"""
Search API server launcher

Usage:
    # defaults from settings.yaml / environment
    python run_server.py

    # override bind address
    python run_server.py --host 127.0.0.1 --port 9000

    # development
    python run_server.py --reload --log-level debug

Exits non-zero when the configuration is invalid or the port cannot be bound.
"""

import argparse
import logging
import os
import sys

# make `api` / `papersearch` importable when run from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def setup_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main():
    from papersearch.config import Config

    parser = argparse.ArgumentParser(description="Paper Search API server")
    parser.add_argument("--host", default=Config.server.host, help=f"Host to bind (default: {Config.server.host})")
    parser.add_argument("--port", type=int, default=Config.server.port, help=f"Port to bind (default: {Config.server.port})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default=Config.server.log_level, choices=["debug", "info", "warning", "error"], help="Log level")

    args = parser.parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)
    logger.info("Starting search API on %s:%d", args.host, args.port)

    import uvicorn

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
