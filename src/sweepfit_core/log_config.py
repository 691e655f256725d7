# --- src/sweepfit_core/log_config.py ---
import logging
import sys
from typing import IO, Optional

# Third-party loggers that flood DEBUG output while rendering charts.
NOISY_LIBRARY_LOGGERS = ("matplotlib", "PIL")

def setup_logging(level=logging.INFO, stream: Optional[IO[str]] = None):
    """ Configures basic logging to stdout (or the given stream). """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.debug(f"Logging configured at level {logging.getLevelName(level)}.")
