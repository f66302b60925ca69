# src/nfl_playstats/config/log_config.py - Logging setup

import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to output to console."""
    # Check if logging is already configured to avoid duplicate configuration
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    # Ingestion and store access are the chatty parts
    logging.getLogger('nfl_playstats.application').setLevel(level)
    logging.getLogger('nfl_playstats.infrastructure').setLevel(level)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
