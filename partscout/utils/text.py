"""Text cleaning helpers."""

from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """연속 공백(개행/탭 포함)을 단일 공백으로 바꾸고 양끝을 자릅니다."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def clean_title(text: str, max_length: int = 120) -> str:
    """
    상품명 정리

    예시:
    - "  Oxygen\\n   Sensor  " -> "Oxygen Sensor"

    Args:
        text: 원본 텍스트
        max_length: 최대 길이

    Returns:
        정리된 제목 (max_length 초과분은 절단)
    """
    cleaned = collapse_whitespace(text)
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length].rstrip()
    return cleaned
