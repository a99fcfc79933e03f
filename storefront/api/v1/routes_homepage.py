# storefront/api/v1/routes_homepage.py
from typing import Optional

from fastapi import APIRouter, Depends

from storefront.core.config import settings
from storefront.db.base import get_store
from storefront.db.store import DataStore
from storefront.domain.homepage.schemas import HomepageOut
from storefront.domain.homepage.service import HomepageService
from storefront.domain.i18n.localization import coerce_language


router = APIRouter(prefix="/api/v1/homepage", tags=["homepage"])


@router.get("", response_model=HomepageOut)
async def homepage_endpoint(
    lang: Optional[str] = None,
    store: DataStore = Depends(get_store),
):
    language = coerce_language(lang or settings.DEFAULT_LANGUAGE)
    widgets = await HomepageService(store).load(language)
    return HomepageOut(language=language.value, widgets=widgets)
