from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from app.db.Models.models import URLItem

logger = logging.getLogger(__name__)


def get_url_by_short_code(db: Session, short_code: str) -> Optional[URLItem]:
    return db.get(URLItem, short_code)


def create_url(db: Session, short_code: str, original_url: str) -> URLItem:
    db_url = URLItem(short_code=short_code, original_url=original_url)
    try:
        db.add(db_url)
        db.commit()
        db.refresh(db_url)
        return db_url
    except IntegrityError as e:
        db.rollback()
        # Tokens come from unique identifiers, so a clash means the counter was reset
        logger.error(
            "IntegrityError creating URLItem short_code=%s original=%s: %s",
            short_code, original_url[:50], str(e)
        )
        raise
