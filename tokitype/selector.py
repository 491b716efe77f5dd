from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .corpus import Corpus, CorpusRecord
from .errors import NoWordsAvailableError
from .settings import SelectionSettings
from .weighting import compute_weight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetPhrase:
    records: Tuple[CorpusRecord, ...]
    requested: int
    words: Tuple[str, ...] = field(init=False)
    text: str = field(init=False)

    def __post_init__(self) -> None:
        words = tuple(record.word for record in self.records)
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "text", " ".join(words))

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - len(self.records))

    def __len__(self) -> int:
        return len(self.records)


def eligible_records(corpus: Corpus) -> List[CorpusRecord]:
    eligible = []
    for record in corpus.values():
        if not record.word:
            logger.debug("skipping %s: no word field", record.id)
            continue
        eligible.append(record)
    return eligible


def select_phrase(
    corpus: Corpus,
    settings: SelectionSettings,
    rng: Optional[random.Random] = None,
) -> TargetPhrase:
    """Pick ``settings.length`` records, lowest weight first.

    ``list.sort`` is stable, so records whose jittered weights tie keep their
    corpus order and a seeded ``rng`` always yields the same phrase.
    """
    rng = rng or random.Random()
    eligible = eligible_records(corpus)
    if not eligible:
        raise NoWordsAvailableError("no words available: no corpus record has a word field")

    weights = {record.id: compute_weight(record, settings, rng) for record in eligible}
    eligible.sort(key=lambda record: weights[record.id])

    phrase = TargetPhrase(records=tuple(eligible[: settings.length]), requested=settings.length)
    if phrase.shortfall:
        logger.warning(
            "only %d eligible words for a phrase of %d; using a shorter phrase",
            len(phrase),
            settings.length,
        )
    return phrase
