"""Chat relay entry point.

Resolves the model provider first, so a missing key or a bad setting stops
the process before any server binds a port. Then it serves the relay, and
the chat page either mounted on the relay (``RUN_MODE=integrated``, default)
or as its own NiceGUI server on port 8080 (``RUN_MODE=separate``).
Environment variables are loaded from a .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables before anything reads the provider settings
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

RELAY_PORT = 8000


def resolve_provider() -> None:
    """Build the provider singleton, exiting with status 1 on bad config."""
    from chatrelay.provider.service import get_provider

    try:
        provider = get_provider()
    except ValueError as e:
        logger.error(f"Cannot start relay, provider configuration is invalid: {e}")
        raise SystemExit(1) from e
    logger.info(f"Relaying to {provider.name} model {provider.model_name}")


def build_integrated_app() -> FastAPI:
    """Create the relay app with the chat page mounted at ``/``."""
    from nicegui import ui

    from chatrelay.api.app import create_app
    from chatrelay.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="AI Chatbot",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chatrelay-secret"),
    )
    return app


def run_integrated() -> None:
    """Serve relay and chat page from one uvicorn server on PORT."""
    import uvicorn

    resolve_provider()
    app = build_integrated_app()

    port = int(os.getenv("PORT", str(RELAY_PORT)))
    logger.info(f"Chat UI on http://localhost:{port}/, relay under /api and /health")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Serve the relay here and the chat page from a child process.

    The page reaches the relay through API_BASE_URL.
    """
    import subprocess

    import uvicorn

    resolve_provider()
    ui_proc = subprocess.Popen(
        [sys.executable, "-c", "from chatrelay.ui.chat_page import main; main()"]
    )
    logger.info(f"Relay on port {RELAY_PORT}, chat UI on http://localhost:8080/")

    try:
        uvicorn.run(
            "chatrelay.api.app:app",
            host=os.getenv("HOST", "0.0.0.0"),
            port=RELAY_PORT,
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )
    finally:
        ui_proc.terminate()
        ui_proc.wait()


def main() -> None:
    """Run the mode named by RUN_MODE."""
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting chat relay in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
