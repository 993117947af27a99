# utils/logger.py
import logging
import os
import sys

from dotenv import load_dotenv

from config.paths import LOG_PATH

load_dotenv()

LOG_LEVEL = os.getenv("CURATION_LOG_LEVEL", "INFO").upper()

# Ensure directory exists
LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger("curation")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

# Imported from several modules; attach handlers once
if not logger.handlers:
    # Run log, kept next to exported files
    file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s.%(module)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # Stream handler (stdout -> container logs)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(module)s: %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False
