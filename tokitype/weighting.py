from __future__ import annotations

import random

from .corpus import CorpusRecord
from .settings import SelectionSettings


def base_weight(record: CorpusRecord, settings: SelectionSettings) -> int:
    """Product of the category, deprecation and per-word weights."""
    category = settings.category_weight(record.usage_category)
    deprecation = settings.deprecated if record.deprecated else settings.nondeprecated
    return category * deprecation * settings.word_weight(record.id)


def jitter_permille(settings: SelectionSettings, rng: random.Random) -> int:
    low, high = settings.jitter
    return rng.randint(low, high)


def compute_weight(record: CorpusRecord, settings: SelectionSettings, rng: random.Random) -> int:
    # base and jitter are both >= 1, so the result is always positive
    return base_weight(record, settings) * jitter_permille(settings, rng)
