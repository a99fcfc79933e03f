# storefront/api/v1/routes_translations.py
from typing import Optional

from fastapi import APIRouter

from storefront.core.config import settings
from storefront.domain.i18n.localization import coerce_language
from storefront.domain.i18n.schemas import TranslationsOut
from storefront.domain.i18n.translations import messages


router = APIRouter(prefix="/api/v1/translations", tags=["i18n"])


@router.get("", response_model=TranslationsOut)
async def translations_endpoint(lang: Optional[str] = None):
    language = coerce_language(lang or settings.DEFAULT_LANGUAGE)
    return TranslationsOut(language=language.value, messages=messages(language))
