from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
import logging

from app.core.config import Settings, settings, resolve_offset
from app.core.exceptions import AllocationError
from app.db.Connection import database
from app.schemas.URLInfoResponse import URLInfoResponse
from app.schemas.URLCreateRequest import URLCreateRequest
from app.services.allocator import IdentifierAllocator, InMemoryAllocator, RedisAllocator
from app.services.shortener import URLService
from app.services.token_generator import TokenGenerator

logger = logging.getLogger(__name__)

router = APIRouter()


def build_allocator(cfg: Settings = settings) -> IdentifierAllocator:
    backend = cfg.ALLOCATOR_BACKEND.lower()
    if backend == "memory":
        logger.warning("Using in-memory identifier allocator; tokens are unique to this process only")
        return InMemoryAllocator()
    return RedisAllocator(database.redis_client, cfg.ALLOCATOR_KEY)


def build_token_generator(cfg: Settings = settings) -> TokenGenerator:
    """Raises ConfigurationError for an unusable key, alphabet or offset."""
    offset = resolve_offset(cfg.ID_OFFSET, cfg.TOKEN_MIN_LENGTH, len(cfg.ALPHABET))
    return TokenGenerator(build_allocator(cfg), cfg.SECRET_KEY, cfg.ALPHABET, offset)


@lru_cache(maxsize=1)
def get_token_generator() -> TokenGenerator:
    return build_token_generator(settings)


@router.post("/shorten", response_model=URLInfoResponse, status_code=status.HTTP_201_CREATED)
def shorten_url_endpoint(
    url_request: URLCreateRequest,
    db: Session = Depends(database.get_db),
    generator: TokenGenerator = Depends(get_token_generator),
):
    original_url_str = str(url_request.original_url)
    try:
        db_url = URLService.create_short_url(db, generator, original_url_str)
    except AllocationError as e:
        logger.error(f"Failed to create short URL for {original_url_str[:50]}... due to: {str(e)}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Identifier allocation failed")

    logger.info(f"API success: Shortened {db_url.original_url[:50]}... to {db_url.short_code}")
    return URLInfoResponse(
        original_url=db_url.original_url,
        short_code=db_url.short_code,
        short_url=f"{settings.BASE_URL}/{db_url.short_code}",
        created_at=db_url.created_at,
    )


@router.get("/{short_code}", tags=["redirect"])
def redirect_to_url_endpoint(short_code: str, db: Session = Depends(database.get_db)):
    db_url = URLService.get_url_by_short_code(db, short_code)
    if db_url is None:
        logger.warning(f"Redirect 404: Short code not found: {short_code}")
        raise HTTPException(status_code=404, detail="URL not found")

    logger.info(f"Redirecting '{short_code}' -> {db_url.original_url[:50]}")
    return RedirectResponse(url=db_url.original_url, status_code=status.HTTP_302_FOUND)
