"""
Centralized logging configuration for the scripts, the API and the flows.
"""
import logging
import sys


def setup_logging(level: str = "INFO"):
    """
    Configure the root logger once per process.

    Format: timestamp, level, logger name, message, written to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
