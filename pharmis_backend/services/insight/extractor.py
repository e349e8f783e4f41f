"""Turns raw completion text into a (title, content) insight and a category.

Both functions are pure; the grammar they accept is the one requested by
`InsightPrompts.DAILY_INSIGHT_SYSTEM`.
"""
from __future__ import annotations

import re
from typing import Iterable, List, NamedTuple, Optional, Tuple

from pharmis_backend.domain.insight.entities import (
    CONTENT_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    InsightCategory,
)

FALLBACK_TITLE = "Health Insight"
MIN_CONTENT_LENGTH = 10
MIN_FALLBACK_LINE_LENGTH = 20

# Lines that are never part of an insight: clocks, timezones and preambles.
_NOISE_PATTERNS = [
    re.compile(r"\b(?:GMT|UTC|IST)\b"),
    re.compile(r"standard time", re.IGNORECASE),
    # a bare clock or ISO date-time line; times inside a sentence are kept
    re.compile(
        r"^(?:\d{4}-\d{2}-\d{2}[ T])?\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?"
        r"\s*(?:[AP]M)?\s*(?:Z|[+-]\d{2}:?\d{2})?$",
        re.IGNORECASE,
    ),
    re.compile(r"^here (?:is|are)\b.*\binsights?\b", re.IGNORECASE),
    re.compile(r"for the 7-day window ending", re.IGNORECASE),
    re.compile(r"ai health insight", re.IGNORECASE),
    re.compile(r"as a professional healthcare", re.IGNORECASE),
    re.compile(r"^insight:?$", re.IGNORECASE),
]

_GENERIC_TITLE = re.compile(r"^(?:insight|here is the insight)$", re.IGNORECASE)
_GENERIC_CONTENT = re.compile(r"^here is the insight$", re.IGNORECASE)
_TITLE_LABEL = re.compile(r"^title\s*:\s*", re.IGNORECASE)
_NO_DATA = re.compile(
    r"no actionable health insight|no health or lifestyle data|not enough data"
    r"|insufficient data|no data|here is the insight",
    re.IGNORECASE,
)


class ExtractedInsight(NamedTuple):
    title: str
    content: str


def _strip_emphasis(text: str) -> str:
    return text.strip().strip("*_").strip()


def _candidate_lines(raw_text: str) -> List[str]:
    lines = []
    for line in raw_text.splitlines():
        line = line.strip()
        if not line:
            continue
        if any(p.search(line) for p in _NOISE_PATTERNS):
            continue
        lines.append(line)
    return lines


def extract_actionable_insight(raw_text: Optional[str]) -> Optional[ExtractedInsight]:
    """Return the first `Title: content` insight in `raw_text`, or None.

    Lines without a usable colon split fall back to the first substantial
    line that is not a "no data" answer, titled "Health Insight". None means
    the completion carried nothing actionable.
    """
    if not raw_text:
        return None
    lines = _candidate_lines(raw_text)

    for line in lines:
        clean = _TITLE_LABEL.sub("", _strip_emphasis(line))
        title, sep, content = clean.partition(":")
        if not sep:
            continue
        title = _strip_emphasis(title)
        content = content.strip()
        if (
            title
            and len(content) > MIN_CONTENT_LENGTH
            and not _GENERIC_TITLE.match(title)
            and not _GENERIC_CONTENT.match(content)
        ):
            return ExtractedInsight(title[:TITLE_MAX_LENGTH], content[:CONTENT_MAX_LENGTH])

    for line in lines:
        clean = _strip_emphasis(line)
        if len(clean) > MIN_FALLBACK_LINE_LENGTH and not _NO_DATA.search(clean):
            return ExtractedInsight(FALLBACK_TITLE, clean[:CONTENT_MAX_LENGTH])

    return None


# Checked top to bottom; first match wins.
CATEGORY_RULES: List[Tuple[Tuple[str, ...], InsightCategory]] = [
    (("sleep",), InsightCategory.SLEEP),
    (("exercise", "activity"), InsightCategory.EXERCISE),
    (("water", "hydration"), InsightCategory.HYDRATION),
    (("mood", "emotional"), InsightCategory.MOOD),
    (("symptom", "pain"), InsightCategory.SYMPTOMS),
    (("medication", "medicine"), InsightCategory.MEDICATION),
]


def classify_category(
    text: str,
    rules: Iterable[Tuple[Tuple[str, ...], InsightCategory]] = CATEGORY_RULES,
) -> InsightCategory:
    lowered = (text or "").lower()
    for keywords, category in rules:
        if any(keyword in lowered for keyword in keywords):
            return category
    return InsightCategory.GENERAL
