from __future__ import annotations

import logging
import sys
from typing import Iterable, Literal

# Libraries that log every request / segment load at INFO
NOISY_LOGGERS = ("chromadb", "google.auth", "urllib3", "httpx")


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Send project logs to stdout in one format.

    Loggers named in `quiet` are held at WARNING or above, so ingestion
    progress is not buried under Chroma and Google client chatter.
    """
    numeric = getattr(logging, level)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(max(logging.WARNING, numeric))
    logging.getLogger("multimodal_search").setLevel(numeric)
