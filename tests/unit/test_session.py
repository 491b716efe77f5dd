"""Unit tests for session state and frames."""

from __future__ import annotations

from typing import List

from tokitype.corpus import CorpusRecord, UsageCategory
from tokitype.diff import Span, SpanKind
from tokitype.selector import TargetPhrase
from tokitype.session import KeyEvent, KeyKind, Session


class _Clock:
    def __init__(self, *ticks: float) -> None:
        self.ticks: List[float] = list(ticks)
        self.now = 0.0

    def __call__(self) -> float:
        if self.ticks:
            self.now = self.ticks.pop(0)
        return self.now


def _phrase(*words: str) -> TargetPhrase:
    records = tuple(
        CorpusRecord(id=word, usage_category=UsageCategory.CORE, deprecated=False, word=word)
        for word in words
    )
    return TargetPhrase(records=records, requested=len(records))


def _type(session: Session, text: str) -> None:
    for char in text:
        session.push(char)


def test_new_session_shows_hidden_phrase() -> None:
    session = Session(_phrase("toki", "pona"))

    assert session.spans == [Span(SpanKind.HIDDEN, "toki pona")]
    assert session.started_at is None
    assert session.frame().metrics.wpm is None


def test_first_keystroke_starts_clock() -> None:
    session = Session(_phrase("mi"), clock=_Clock(5.0))

    session.push("m")

    assert session.started_at == 5.0
    assert session.key_log == [(KeyEvent.insert("m"), 5.0)]


def test_pop_on_empty_buffer_is_ignored() -> None:
    session = Session(_phrase("mi"))

    assert session.pop() is False
    assert session.started_at is None
    assert session.key_log == []


def test_backspace_recomputes_spans() -> None:
    session = Session(_phrase("mi", "moku"))
    _type(session, "mx")
    session.pop()

    assert session.input == "m"
    assert session.spans == [Span(SpanKind.CORRECT, "m"), Span(SpanKind.HIDDEN, "i moku")]
    assert session.key_log[-1][0].kind is KeyKind.DELETE


def test_completes_when_input_reaches_target_length() -> None:
    clock = _Clock(0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0)
    session = Session(_phrase("toki", "pona"), clock=clock)

    _type(session, "toki pona")

    assert session.finished
    assert session.ended_at == 8.0
    metrics = session.metrics()
    assert metrics.elapsed == 8.0
    assert metrics.wpm == 60.0 * 2 / 8.0
    assert metrics.char_accuracy == 100
    assert metrics.word_accuracy == 100


def test_overflow_reaching_target_length_does_not_finish() -> None:
    session = Session(_phrase("mi", "moku", "kili"))

    _type(session, "mi" + "x" * 10)

    assert len(session.input) == len(session.target)
    assert not session.finished
    assert session.words_completed() == 0
    assert session.spans == [
        Span(SpanKind.CORRECT, "mi"),
        Span(SpanKind.OVERFLOW, "x" * 10),
        Span(SpanKind.HIDDEN, " moku kili"),
    ]


def test_wrong_last_character_finishes() -> None:
    session = Session(_phrase("mi"))

    _type(session, "mx")

    assert session.finished
    assert session.metrics().char_accuracy == 50


def test_completes_on_space_after_last_word() -> None:
    session = Session(_phrase("toki", "pona"))

    _type(session, "t p ")

    assert session.finished
    assert session.words_completed() == 2


def test_input_is_ignored_after_completion() -> None:
    session = Session(_phrase("mi"))
    _type(session, "mi")

    assert session.push("x") is False
    assert session.pop() is False
    assert session.input == "mi"


def test_apply_maps_key_events() -> None:
    session = Session(_phrase("mi", "moku"))

    assert session.apply(KeyEvent.insert("m")) is True
    assert session.apply(KeyEvent.delete()) is True
    assert session.input == ""
    assert session.apply(KeyEvent.quit()) is False


def test_live_wpm_counts_spaces_typed() -> None:
    clock = _Clock(0.0, 10.0, 20.0, 30.0)
    session = Session(_phrase("a", "b", "c"), clock=clock)
    _type(session, "a b")

    assert session.words_completed() == 1
    assert session.metrics(now=30.0).wpm == 60.0 * 1 / 30.0


def test_frame_tracks_word_near_cursor() -> None:
    session = Session(_phrase("mi", "moku", "kili"))

    frame = session.frame()
    assert frame.current_word.word == "mi"
    assert frame.next_word.word == "moku"

    _type(session, "mi mo")
    frame = session.frame()
    assert frame.current_word.word == "moku"
    assert frame.next_word.word == "kili"

    _type(session, "ku k")
    frame = session.frame()
    assert frame.current_word.word == "kili"
    assert frame.next_word is None


def test_frame_is_a_snapshot() -> None:
    session = Session(_phrase("mi"))
    frame = session.frame()
    session.push("m")

    assert frame.spans == (Span(SpanKind.HIDDEN, "mi"),)
    assert frame.finished is False
