import os
import sys

import uvicorn
from loguru import logger

from app.core.app import app  # noqa: F401
from app.core.config import settings

if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())

    PORT = os.getenv("PORT", settings.PORT)
    reload = settings.APP_ENV == "development"
    uvicorn.run("app.core.app:app", host="0.0.0.0", port=int(PORT), reload=reload)
