from pydantic import BaseModel, ConfigDict, HttpUrl, Field
from datetime import datetime

# Response DTOs
class URLInfoResponse(BaseModel):
    # original_url is the Python field, 'url' is the JSON key
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    original_url: HttpUrl = Field(..., alias="url")
    short_code: str
    short_url: str
    created_at: datetime
