"""Static UI strings shared by the storefront views.

Entity text is resolved with ``resolve_localized``; the strings here are the
fixed labels around it (buttons, badges, empty states).
"""
from typing import Dict

from .localization import DEFAULT_LANGUAGE, Language, coerce_language

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "mk": {
        "common.viewAll": "Види ги сите",
        "common.retry": "Обиди се повторно",
        "product.badge.sale": "Попуст",
        "product.badge.bestSeller": "Најпродавано",
        "product.priceOnRequest": "Цена на барање",
        "product.inquire": "Прашај",
        "products.loadMore": "Вчитај повеќе",
        "products.empty": "Нема производи за избраните филтри.",
        "products.error": "Производите не можеа да се вчитаат.",
        "homepage.error": "Почетната страница не можеше да се вчита.",
    },
    "en": {
        "common.viewAll": "View all",
        "common.retry": "Try again",
        "product.badge.sale": "Sale",
        "product.badge.bestSeller": "Best seller",
        "product.priceOnRequest": "Price on request",
        "product.inquire": "Inquire",
        "products.loadMore": "Load more",
        "products.empty": "No products match the selected filters.",
        "products.error": "Products could not be loaded.",
        "homepage.error": "The homepage could not be loaded.",
    },
}


def translate(key: str, language=DEFAULT_LANGUAGE) -> str:
    lang = coerce_language(language).value
    table = TRANSLATIONS.get(lang, {})
    if key in table:
        return table[key]
    # untranslated english strings fall back to the macedonian label
    return TRANSLATIONS[DEFAULT_LANGUAGE.value].get(key, key)


class LanguageContext:
    """Current display language plus lookup of static UI strings."""

    def __init__(self, language=DEFAULT_LANGUAGE):
        self.language: Language = coerce_language(language)

    def translate(self, key: str) -> str:
        return translate(key, self.language)

    t = translate


def messages(language=DEFAULT_LANGUAGE) -> Dict[str, str]:
    """Every UI string for ``language``, with the same fallback as ``translate``."""
    return {key: translate(key, language) for key in TRANSLATIONS[DEFAULT_LANGUAGE.value]}
