from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()

class URLItem(Base):
    __tablename__ = "urls"

    # Token issued by the generator; case-sensitive, unique per identifier
    short_code = Column(String(32), primary_key=True, index=True)
    original_url = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
