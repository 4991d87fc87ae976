"""
텍스트 처리 유틸리티.
"""

import re
import unicodedata
from typing import Iterable

_PUNCT_RE = re.compile(r"[^\w\s]", re.UNICODE)
_SPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    검색 매칭용 정규화.
    소문자화 → 발음 구별 기호 제거 → 구두점을 공백으로 → 공백 정리.

    Args:
        text: str (원문)
    Returns:
        str: 정규화된 문자열
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    # 결합 문자만 제거 후 재조합(한글 음절 등은 원래대로)
    stripped = unicodedata.normalize(
        "NFC", "".join(ch for ch in decomposed if not unicodedata.combining(ch)))
    stripped = _PUNCT_RE.sub(" ", stripped)
    return _SPACE_RE.sub(" ", stripped).strip()


def contains_ci(haystack: str | None, needle: str) -> bool:
    """대소문자 무시 부분 문자열 포함 여부. needle은 이미 소문자라고 가정."""
    return bool(haystack) and needle in haystack.lower()


def any_contains_ci(values: Iterable[str], needle: str) -> bool:
    return any(contains_ci(v, needle) for v in values)


def highlight(text: str, keywords: Iterable[str], tag: str = "mark") -> str:
    """
    text 안의 keyword들을 <mark>...</mark>로 감싼다(대소문자 무시).

    Args:
        text: str
        keywords: Iterable[str]
        tag: str (감쌀 태그 이름)
    Returns:
        str: 하이라이트된 문자열
    """
    words = sorted({k for k in keywords if k}, key=len, reverse=True)
    if not text or not words:
        return text
    pattern = re.compile("(" + "|".join(re.escape(w) for w in words) + ")", re.IGNORECASE)
    return pattern.sub(rf"<{tag}>\1</{tag}>", text)


def extract_keywords(text: str, min_length: int = 2) -> list[str]:
    """정규화된 텍스트에서 min_length 이상인 단어 목록."""
    return [w for w in normalize_text(text).split(" ") if len(w) >= min_length]
