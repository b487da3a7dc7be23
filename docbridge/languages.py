"""
Supported target languages.

Single source of truth for the language keys accepted by the upload form,
the upload endpoint and the pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LanguageConfig:
    key: str    # internal identifier, e.g. "spanish"
    label: str  # display name
    code: str   # BCP-47 / Google Translate code
    flag: str   # emoji flag

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


SUPPORTED_LANGUAGES: tuple = (
    LanguageConfig(key="spanish", label="Spanish", code="es", flag="\U0001F1EA\U0001F1F8"),
    LanguageConfig(key="french", label="French", code="fr", flag="\U0001F1EB\U0001F1F7"),
    LanguageConfig(key="mandarin", label="Mandarin", code="zh-CN", flag="\U0001F1E8\U0001F1F3"),
)

_BY_KEY: Dict[str, LanguageConfig] = {lang.key: lang for lang in SUPPORTED_LANGUAGES}


def normalize_key(key: Optional[str]) -> str:
    return (key or "").strip().lower()


def get_language(key: Optional[str]) -> Optional[LanguageConfig]:
    return _BY_KEY.get(normalize_key(key))


def language_keys() -> List[str]:
    return [lang.key for lang in SUPPORTED_LANGUAGES]
