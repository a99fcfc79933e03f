# storefront/domain/i18n/schemas.py
from typing import Dict

from pydantic import BaseModel


class TranslationsOut(BaseModel):
    language: str
    messages: Dict[str, str]
