from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .corpus import CorpusRecord
from .diff import Span, SpanKind, compute_spans
from .metrics import SessionMetrics, char_accuracy, compute_wpm, word_accuracy
from .selector import TargetPhrase

logger = logging.getLogger(__name__)


class KeyKind(Enum):
    INSERT = "insert"
    DELETE = "delete"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def insert(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.INSERT, char)

    @classmethod
    def delete(cls) -> "KeyEvent":
        return cls(KeyKind.DELETE)

    @classmethod
    def quit(cls) -> "KeyEvent":
        return cls(KeyKind.QUIT)


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs for one paint."""

    spans: Tuple[Span, ...]
    current_word: Optional[CorpusRecord]
    next_word: Optional[CorpusRecord]
    metrics: SessionMetrics
    finished: bool


class Session:
    """One pass over a target phrase.

    The input buffer only changes through ``push`` and ``pop``; spans are
    recomputed from scratch after every accepted edit. Once the phrase is
    complete the session is frozen until a new one is created.
    """

    def __init__(self, phrase: TargetPhrase, clock: Callable[[], float] = time.time) -> None:
        self.phrase = phrase
        self.clock = clock
        self.input = ""
        self.key_log: List[Tuple[KeyEvent, float]] = []
        self.started_at: Optional[float] = None
        self.ended_at: Optional[float] = None
        self.spans: List[Span] = compute_spans(self.target, self.input)

    @property
    def target(self) -> str:
        return self.phrase.text

    @property
    def finished(self) -> bool:
        return self.ended_at is not None

    # ---------------------------
    # Edits
    # ---------------------------

    def push(self, char: str) -> bool:
        if self.finished or not char:
            return False
        self.input += char
        self._accept(KeyEvent.insert(char))
        return True

    def pop(self) -> bool:
        if self.finished or not self.input:
            return False
        self.input = self.input[:-1]
        self._accept(KeyEvent.delete())
        return True

    def apply(self, event: KeyEvent) -> bool:
        """Apply a key event; returns False when the event asks to quit."""
        if event.kind is KeyKind.QUIT:
            return False
        if event.kind is KeyKind.DELETE:
            self.pop()
        else:
            self.push(event.char)
        return True

    def _accept(self, event: KeyEvent) -> None:
        now = self.clock()
        if self.started_at is None:
            self.started_at = now
        self.key_log.append((event, now))
        self.spans = compute_spans(self.target, self.input)
        if self._is_complete():
            self.ended_at = now
            logger.info("phrase of %d words finished in %.2fs", len(self.phrase), now - self.started_at)

    def _is_complete(self) -> bool:
        # overflow can make the input as long as the target without reaching its end
        reached_end = not self.spans or self.spans[-1].kind is not SpanKind.HIDDEN
        return reached_end or self.input.count(" ") >= len(self.phrase)

    # ---------------------------
    # Derived state
    # ---------------------------

    def words_completed(self) -> int:
        if self.finished:
            return len(self.phrase)
        return min(self.input.count(" "), len(self.phrase))

    def current_index(self) -> int:
        return min(self.input.count(" "), max(0, len(self.phrase) - 1))

    def _record_at(self, index: int) -> Optional[CorpusRecord]:
        if 0 <= index < len(self.phrase):
            return self.phrase.records[index]
        return None

    def elapsed(self, now: Optional[float] = None) -> Optional[float]:
        if self.started_at is None:
            return None
        end = self.ended_at if self.ended_at is not None else (now if now is not None else self.clock())
        return end - self.started_at

    def metrics(self, now: Optional[float] = None) -> SessionMetrics:
        elapsed = self.elapsed(now)
        return SessionMetrics(
            started_at=self.started_at,
            ended_at=self.ended_at,
            elapsed=elapsed,
            wpm=compute_wpm(self.words_completed(), elapsed),
            char_accuracy=char_accuracy(self.spans, self.target),
            word_accuracy=word_accuracy(self.phrase.words, self.input),
        )

    def frame(self, now: Optional[float] = None) -> Frame:
        index = self.current_index()
        return Frame(
            spans=tuple(self.spans),
            current_word=self._record_at(index),
            next_word=self._record_at(index + 1),
            metrics=self.metrics(now),
            finished=self.finished,
        )
