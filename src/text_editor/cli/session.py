"""Session logging setup for the text editor CLI."""

import logging
from datetime import datetime

from text_editor.config.schema import EditorSettings

logger = logging.getLogger(__name__)


def setup_session_logging(settings: EditorSettings, session_name: str | None = None) -> str:
    """Setup session-specific logging to file (not console).

    Standard output carries tool results, so log records only ever go to
    ``<data_dir>/logs/session-{name}.log``.

    Args:
        settings: Editor settings (``log_level`` already merged with the
            environment)
        session_name: Session identifier (defaults to a timestamp)

    Returns:
        Path to log file as string

    Example:
        >>> setup_session_logging(settings, "2025-11-09-13-16-20")
        '/Users/user/.text-editor/logs/session-2025-11-09-13-16-20.log'
    """
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    if session_name is None:
        session_name = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    log_file = log_dir / f"session-{session_name}.log"

    # Clear any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    logging.basicConfig(
        level=settings.numeric_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
        filemode="a",
        force=True,
    )

    logger.debug(f"Session logging to {log_file} at level {settings.log_level}")
    return str(log_file)
