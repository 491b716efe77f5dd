from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .diff import Span, SpanKind, count_chars

# below this a rate would be meaningless
MIN_ELAPSED_SECONDS = 0.001


@dataclass(frozen=True)
class SessionMetrics:
    started_at: Optional[float] = None
    ended_at: Optional[float] = None
    elapsed: Optional[float] = None
    wpm: Optional[float] = None
    char_accuracy: Optional[int] = None
    word_accuracy: Optional[int] = None


def compute_wpm(words_completed: int, elapsed_sec: Optional[float]) -> Optional[float]:
    if elapsed_sec is None or elapsed_sec < MIN_ELAPSED_SECONDS:
        return None
    return 60.0 * words_completed / elapsed_sec


def percent(part: int, whole: int) -> Optional[int]:
    if whole <= 0:
        return None
    return round(100 * part / whole)


def char_accuracy(spans: Sequence[Span], target: str) -> Optional[int]:
    return percent(count_chars(spans, SpanKind.CORRECT), len(target))


def word_accuracy(target_words: Sequence[str], typed: str) -> Optional[int]:
    typed_words = typed.split(" ")
    matches = sum(1 for want, got in zip(target_words, typed_words) if want == got)
    return percent(matches, len(target_words))
