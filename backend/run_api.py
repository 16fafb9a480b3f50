#!/usr/bin/env python
"""
Run the Finearr API server.

Usage:
    python run_api.py
    python run_api.py --reload  # Development mode

When ssl.enabled is set, the key and certificate must be readable or the
server refuses to start.
"""

import argparse
import logging
import os
import sys

import uvicorn

from shared.config import Settings, get_settings

logger = logging.getLogger("finearr")


def ssl_options(settings: Settings) -> dict:
    """
    Build uvicorn TLS options.

    Raises:
        SystemExit: If TLS is enabled and the key or certificate is unreadable
    """
    ssl = settings.ssl
    if not ssl.enabled:
        return {}

    for label, path in (("key", ssl.key_path), ("certificate", ssl.cert_path)):
        if path is None or not os.access(path, os.R_OK):
            logger.error(f"SSL {label} is not readable: {path}")
            raise SystemExit(1)

    options = {
        "ssl_keyfile": str(ssl.key_path),
        "ssl_certfile": str(ssl.cert_path),
    }
    if ssl.ca_path is not None:
        options["ssl_ca_certs"] = str(ssl.ca_path)
    return options


def main():
    parser = argparse.ArgumentParser(description="Run Finearr API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
        **ssl_options(settings),
    )


if __name__ == "__main__":
    main()
