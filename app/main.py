from app.db.Connection import database
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import signal, sys

from app.core.config import settings
from app.db.Models import models
from app.api import shortener
from app.core.logging_config import configure_logging

logger = configure_logging(settings.LOG_LEVEL)
logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")

models.Base.metadata.create_all(bind=database.engine)
logger.info("Database models initialized/checked.")

database.verify_database_connection()
if settings.ALLOCATOR_BACKEND.lower() == "redis":
    database.verify_redis_connection()

# Bad SECRET_KEY, ALPHABET or offset settings stop the process here
generator = shortener.get_token_generator()
logger.info(f"Token generator ready (offset {generator.offset}, {len(generator.alphabet)} symbols).")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL Shortener with obfuscated sequential short codes"
)

@app.get("/health", tags=["health"])
def health_check():
    return {"status": "healthy", "service": "url-shortener"}

app.include_router(shortener.router, prefix="")

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

def _shutdown(signum, frame):
    logger.info("Shutting down gracefully...")
    try:
        database.engine.dispose()
    except Exception:
        logger.debug("Error disposing DB engine")
    try:
        database.redis_client.close()
    except Exception:
        logger.debug("Error closing Redis client")
    sys.exit(0)

signal.signal(signal.SIGTERM, _shutdown)
signal.signal(signal.SIGINT, _shutdown)
