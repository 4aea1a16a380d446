from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.main import api_router
from app.services.mood.repository import profile_repository

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load the mood catalog once at startup so the first request does not pay for it.
    """
    catalog = profile_repository.get_catalog()
    logger.info(f"Mood catalog ready with {len(catalog)} profiles (fallback: '{profile_repository.fallback.label}')")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Matches emotion confidence vectors to curated mood profiles",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
