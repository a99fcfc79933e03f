"""Resolution of bilingual entity fields.

Entities store display text as language-tagged column pairs (``name_mk`` /
``name_en``), sometimes next to an older untagged column (``name``). Every
view resolves those through ``resolve_localized`` so the fallback order lives
in one place.
"""
import enum
from typing import Any, Mapping, Optional, Union


class Language(str, enum.Enum):
    MK = "mk"
    EN = "en"


DEFAULT_LANGUAGE = Language.MK


def coerce_language(raw: Any) -> Language:
    """Map any incoming language hint onto a supported language."""
    if isinstance(raw, Language):
        return raw
    try:
        return Language(str(raw).strip().lower())
    except ValueError:
        return DEFAULT_LANGUAGE


def _read(entity: Any, key: str) -> Any:
    if entity is None:
        return None
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value if value.strip() else None


def resolve_localized(entity: Any, field: str, language: Union[Language, str] = DEFAULT_LANGUAGE) -> str:
    """Return the display text of ``field`` for ``language``.

    Probes ``{field}_{language}``, then ``{field}_mk``, then the legacy
    untagged ``{field}``. Missing, ``None`` and blank values are skipped.
    Returns ``""`` when nothing is set; never raises.
    """
    lang = language.value if isinstance(language, Language) else str(language)
    for key in (f"{field}_{lang}", f"{field}_{DEFAULT_LANGUAGE.value}", field):
        text = _text(_read(entity, key))
        if text is not None:
            return text
    return ""
