"""Unit tests for speed and accuracy metrics."""

from __future__ import annotations

import math

import pytest

from tokitype.diff import compute_spans
from tokitype.metrics import (
    MIN_ELAPSED_SECONDS,
    char_accuracy,
    compute_wpm,
    percent,
    word_accuracy,
)


def test_wpm_ten_words_in_thirty_seconds() -> None:
    assert compute_wpm(10, 30.0) == 20.0


@pytest.mark.parametrize("elapsed", [None, 0.0, -1.0, MIN_ELAPSED_SECONDS / 2])
def test_wpm_unavailable_for_near_zero_duration(elapsed) -> None:
    assert compute_wpm(3, elapsed) is None


def test_wpm_is_always_finite() -> None:
    value = compute_wpm(1000, MIN_ELAPSED_SECONDS)

    assert value is not None and math.isfinite(value)


def test_percent_rounds_to_integer() -> None:
    assert percent(2, 3) == 67
    assert percent(1, 3) == 33
    assert percent(0, 0) is None


def test_char_accuracy_counts_correct_target_chars() -> None:
    target = "toki pona"
    spans = compute_spans(target, "toki pan")

    assert char_accuracy(spans, target) == round(100 * 7 / 9)


def test_char_accuracy_ignores_overflow() -> None:
    assert char_accuracy(compute_spans("mi", "mixxx"), "mi") == 100


def test_word_accuracy_compares_words_by_position() -> None:
    assert word_accuracy(("toki", "pona"), "toki pan") == 50
    assert word_accuracy(("toki", "pona"), "toki pona") == 100
    assert word_accuracy(("mi", "moku"), "") == 0
    assert word_accuracy((), "mi") is None
