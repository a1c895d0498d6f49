import re
from unidecode import unidecode

# German transliteration differs from unidecode's default ("ü" -> "u")
GERMAN_TRANSLITERATION = str.maketrans({
    "ä": "ae", "ö": "oe", "ü": "ue",
    "Ä": "Ae", "Ö": "Oe", "Ü": "Ue",
    "ß": "ss",
})


def slugify(text):
    if not text:
        return ""
    text = unidecode(str(text).translate(GERMAN_TRANSLITERATION)).lower()
    return re.sub(r'[^a-z0-9]+', '-', text).strip('-')


def slugify_localized(titles, slugs=None):
    """Fill in a slug for every locale that has a title but no slug yet."""
    result = dict(slugs or {})
    for locale, title in (titles or {}).items():
        if not isinstance(title, str) or not title.strip():
            continue
        current = result.get(locale)
        if not isinstance(current, str) or not current.strip():
            result[locale] = slugify(title)
    return result
