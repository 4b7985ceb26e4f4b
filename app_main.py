"""Application entry point for the live quiz coordinator."""

from __future__ import annotations

from live_quiz.config import get_settings
from live_quiz.core.quiz_manager import QuizManager
from live_quiz.server.api_server import run_api_server
from live_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, load content, and serve the API."""
    settings = get_settings()
    logger = configure_logging(settings.log_level.upper())
    logger.info("Starting live quiz coordinator…")

    quiz_manager = QuizManager.from_settings(settings)
    logger.info("Content file: %s", settings.content_path)
    logger.info("Serving on http://%s:%d/", settings.host, settings.port)
    run_api_server(quiz_manager=quiz_manager, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
