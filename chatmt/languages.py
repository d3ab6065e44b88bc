# chatmt/languages.py
from typing import Optional


# Código de idioma → nombre en inglés que entienden los modelos
_LANGUAGES: dict[str, str] = {
    "auto":   "Auto",
    "zh-CHS": "Chinese-Simplified",
    "zh-CHT": "Chinese-Traditional",
    "en":     "English",
    "ja":     "Japanese",
    "ko":     "Korean",
    "fr":     "French",
    "es":     "Spanish",
    "pt":     "Portuguese",
    "it":     "Italian",
    "de":     "German",
    "ru":     "Russian",
    "ar":     "Arabic",
    "sv":     "Swedish",
    "nl":     "Dutch",
    "ro":     "Romanian",
    "th":     "Thai",
    "sk":     "Slovak",
    "hu":     "Hungarian",
    "el":     "Greek",
    "da":     "Danish",
    "fi":     "Finnish",
    "pl":     "Polish",
    "cs":     "Czech",
    "tr":     "Turkish",
    "lt":     "Lithuanian",
    "lv":     "Latvian",
    "uk":     "Ukrainian",
    "bg":     "Bulgarian",
    "id":     "Indonesian",
    "ms":     "Malay",
    "sl":     "Slovenian",
    "et":     "Estonian",
    "vi":     "Vietnamese",
    "fa":     "Persian",
    "hi":     "Hindi",
    "te":     "Telugu",
    "ta":     "Tamil",
    "ur":     "Urdu",
    "tl":     "Filipino",
    "km":     "Khmer",
    "lo":     "Lao",
    "bn":     "Bengali",
    "my":     "Burmese",
    "no":     "Norwegian",
    "sr":     "Serbian",
    "hr":     "Croatian",
    "mn":     "Mongolian",
    "he":     "Hebrew",
}

# Alias habituales que no son las claves canónicas
_ALIASES: dict[str, str] = {
    "zh":      "zh-CHS",
    "zh-cn":   "zh-CHS",
    "zh-hans": "zh-CHS",
    "zh-tw":   "zh-CHT",
    "zh-hk":   "zh-CHT",
    "zh-hant": "zh-CHT",
}


def resolve_language_code(code: str) -> Optional[str]:
    """Normaliza un código (insensible a mayúsculas) a su clave canónica."""
    wanted = code.strip()
    lowered = wanted.lower()
    if lowered in _ALIASES:
        return _ALIASES[lowered]
    for canonical in _LANGUAGES:
        if canonical.lower() == lowered:
            return canonical
    return None


def get_language_english_name(code: str) -> str:
    """
    Devuelve el nombre en inglés del idioma.
    Un código desconocido se devuelve tal cual: el modelo suele entenderlo igual.
    """
    canonical = resolve_language_code(code)
    if canonical is None:
        return code
    return _LANGUAGES[canonical]


def supported_languages() -> list[tuple[str, str]]:
    return list(_LANGUAGES.items())
