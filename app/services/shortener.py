from sqlalchemy.orm import Session
from app.db.Models.models import URLItem
from app.db import repository
from app.services.token_generator import TokenGenerator
from typing import Optional
import logging


logger = logging.getLogger(__name__)


class URLService:

    @staticmethod
    def create_short_url(db: Session, generator: TokenGenerator, original_url: str) -> URLItem:
        # Every request consumes a fresh identifier; AllocationError propagates to the API layer
        short_code = generator.next()
        url_item = repository.create_url(db, short_code, original_url)
        logger.info("Stored short code '%s' for URL: %s", short_code, original_url[:50])
        return url_item

    @staticmethod
    def get_url_by_short_code(db: Session, short_code: str) -> Optional[URLItem]:
        return repository.get_url_by_short_code(db, short_code)
