# storefront/schemas/image.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ImageRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filename: str
    url: str
    full_url: str


class ImageDetailsRead(ImageRead):
    size: int
    created: datetime
    modified: datetime
