"""
Server launcher for the canvas FastAPI application.

Reads host, port and log level from config and starts Uvicorn.
"""

import os
import sys
import logging

import uvicorn

from config.settings import config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """
    Run the canvas service with Uvicorn (FastAPI async server).

    Changes into the project root so ``logs/`` and ``VERSION`` resolve, then
    serves ``main:app`` until interrupted.
    """
    script_dir = os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    )
    os.chdir(script_dir)
    os.makedirs("logs", exist_ok=True)

    host = config.host
    port = config.port
    debug = config.debug
    log_level = config.log_level.lower()

    environment = "development" if debug else "production"
    reload = debug

    print(f"Environment: {environment} (DEBUG={debug})")
    print(f"Host: {host}")
    print(f"Port: {port}")
    print(f"Log Level: {log_level.upper()}")
    print(f"Auto-reload: {reload}")
    print("=" * 80)
    print(f"Server ready at: http://localhost:{port}")
    if debug:
        print(f"API Docs: http://localhost:{port}/docs")
    print("=" * 80)
    print("Press Ctrl+C to stop the server")
    print()

    try:
        uvicorn.run(
            "main:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            log_config=None
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except OSError as e:
        logger.error("Failed to start server on %s:%s: %s", host, port, e)
        sys.exit(1)
