"""FastAPI application entry point."""

import os
import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from dotenv import load_dotenv

# Load .env before reading CORS_ORIGINS / LOG_LEVEL below
load_dotenv()

from api.dependencies import get_settings
from api.errors import register_exception_handlers
from api.routes import auth, cases, health
from adapter.mongodb.connection import create_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from utils.logging import setup_structured_logging

setup_structured_logging(os.getenv("LOG_LEVEL", "INFO").upper())

logger = logging.getLogger(__name__)

try:
    VERSION = version("case-desk")
except PackageNotFoundError:
    VERSION = "0.0.0"

SERVICE_NAME = "Case Desk API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: connect to MongoDB on startup, close on shutdown."""
    settings = get_settings()
    client = create_mongodb_client(settings.mongo_uri)
    app.state.mongo_client = client

    if client:
        if ensure_all_indexes(client[settings.database_name]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield  # App runs here

    if client:
        client.close()


app = FastAPI(
    title=SERVICE_NAME,
    description="User registration, login and case tracking",
    version=VERSION,
    lifespan=lifespan,
)

# When using JWT authentication with Authorization header:
# - If CORS_ORIGINS="*": allow_credentials must be False (browsers don't support credentials with wildcard)
# - If CORS_ORIGINS is a specific list: allow_credentials can be True
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(cases.router)
app.include_router(health.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness endpoint."""
    return "API running..."


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=get_settings().port,
        access_log=False  # structured logging already covers requests
    )
