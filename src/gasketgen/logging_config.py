"""
Logging Configuration
Sets up the `gasketgen` logger for the command line tool.

Reports go to stdout, so log records are kept on stderr. Warnings from
ezdxf are routed through the same handlers so a DXF problem shows up in
the log file next to the generator messages.
"""
import logging
import sys
from typing import Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'gasketgen' namespace and the ezdxf warnings.

    Args:
        level: Logging level for gasketgen records (e.g. logging.DEBUG)
        log_file: Optional path to save logs to a file.
    """
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%H:%M:%S'))
        handlers.append(file_handler)

    # (logger name, level); ezdxf is never more verbose than WARNING
    targets = [("gasketgen", level), ("ezdxf", max(level, logging.WARNING))]
    for name, target_level in targets:
        logger = logging.getLogger(name)
        logger.setLevel(target_level)
        # repeated main() calls in one process must not stack handlers
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("gasketgen").debug("Logging initialized.")
