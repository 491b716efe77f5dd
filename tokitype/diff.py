from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import groupby
from operator import itemgetter
from typing import Iterable, List, Sequence, Tuple

HIDDEN_PLACEHOLDER = "_"


class SpanKind(Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    OVERFLOW = "overflow"
    SKIPPED = "skipped"
    HIDDEN = "hidden"


# kinds whose text comes from the target rather than from the input
TARGET_KINDS = frozenset({SpanKind.CORRECT, SpanKind.WRONG, SpanKind.SKIPPED, SpanKind.HIDDEN})


@dataclass(frozen=True)
class Span:
    kind: SpanKind
    text: str

    @property
    def display(self) -> str:
        """Text to paint. Hidden letters are masked, hidden spaces kept."""
        if self.kind is SpanKind.HIDDEN:
            return "".join(" " if c == " " else HIDDEN_PLACEHOLDER for c in self.text)
        return self.text

    @property
    def from_target(self) -> bool:
        return self.kind in TARGET_KINDS


def classify(target: str, typed: str) -> List[Tuple[SpanKind, str]]:
    """Classify every position of ``typed`` against ``target``.

    Each step consumes a character from one or both sides. A space typed
    inside a target word skips the rest of that word; letters typed past the
    end of a target word are overflow.
    """
    out: List[Tuple[SpanKind, str]] = []
    t = i = 0
    while True:
        tc = target[t] if t < len(target) else None
        ic = typed[i] if i < len(typed) else None

        if tc is not None and tc == ic:
            out.append((SpanKind.CORRECT, tc))
            t += 1
            i += 1
        elif tc is not None and ic == " ":
            out.append((SpanKind.SKIPPED, tc))
            t += 1
        elif ic is not None and (tc is None or tc == " "):
            out.append((SpanKind.OVERFLOW, ic))
            i += 1
        elif tc is not None and ic is not None:
            out.append((SpanKind.WRONG, tc))
            t += 1
            i += 1
        elif tc is not None:
            out.append((SpanKind.HIDDEN, tc))
            t += 1
        else:
            break
    return out


def merge_runs(pairs: Iterable[Tuple[SpanKind, str]]) -> List[Span]:
    return [
        Span(kind, "".join(char for _, char in run))
        for kind, run in groupby(pairs, key=itemgetter(0))
    ]


def compute_spans(target: str, typed: str) -> List[Span]:
    return merge_runs(classify(target, typed))


def count_chars(spans: Sequence[Span], kind: SpanKind) -> int:
    return sum(len(span.text) for span in spans if span.kind is kind)


def target_text(spans: Sequence[Span]) -> str:
    return "".join(span.text for span in spans if span.from_target)
