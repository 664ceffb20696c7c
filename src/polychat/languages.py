"""
Language catalogue and sentinel variant codes.
"""

from typing import Optional

ORIGINAL = "orig"
UNKNOWN = "unknown"
ORIGINAL_LABEL = "Original"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "hi": "Hindi",
    "ta": "Tamil",
    "te": "Telugu",
    "mr": "Marathi",
    "ja": "Japanese",
    "zh": "Chinese",
    "ar": "Arabic",
    "pt": "Portuguese",
    "ru": "Russian",
    "ko": "Korean",
}


def language_name(code: Optional[str]) -> str:
    """Human name for a language code, falling back to the upper-cased code."""
    if not code:
        return "Unknown"
    return LANGUAGE_NAMES.get(code, code.upper())


def receiver_code(lang: str) -> str:
    return f"recv_{lang}"


def back_translation_code(lang: str) -> str:
    return f"back_{lang}"


def receiver_label(lang: str) -> str:
    return f"{language_name(lang)} (receiver)"


def back_translation_label(lang: str) -> str:
    return f"Back to {language_name(lang)}"
