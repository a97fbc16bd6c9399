import logging

import uvicorn

from .config import settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    logger.info("API running on http://localhost:%s", settings.PORT)
    uvicorn.run("task_api.main:app", host="0.0.0.0", port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
