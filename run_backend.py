#!/usr/bin/env python
"""Script to run the Taskboard API server."""
import uvicorn

from taskboard.config import HOST, LOG_FILE, LOG_LEVEL, PORT
from taskboard.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(LOG_LEVEL, LOG_FILE)
    uvicorn.run(
        "taskboard.main:app",
        host=HOST,
        port=PORT,
        log_config=None,
    )
