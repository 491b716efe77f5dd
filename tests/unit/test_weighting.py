"""Unit tests for the weighting function."""

from __future__ import annotations

import random

import pytest

from tokitype.corpus import CorpusRecord, UsageCategory
from tokitype.settings import SelectionSettings
from tokitype.weighting import base_weight, compute_weight, jitter_permille


def _record(
    *,
    word_id: str = "pona",
    category: UsageCategory = UsageCategory.CORE,
    deprecated: bool = False,
) -> CorpusRecord:
    return CorpusRecord(id=word_id, usage_category=category, deprecated=deprecated, word=word_id)


def test_base_weight_is_product_of_three_factors() -> None:
    assert base_weight(_record(), SelectionSettings()) == 1000 * 1000 * 1000


def test_base_weight_uses_category_deprecation_and_override() -> None:
    settings = SelectionSettings(obscure=7, deprecated=11, words={"pake": 13})
    record = _record(word_id="pake", category=UsageCategory.OBSCURE, deprecated=True)

    assert base_weight(record, settings) == 7 * 11 * 13


def test_jittered_weight_stays_within_bounds() -> None:
    settings = SelectionSettings()
    rng = random.Random(7)
    base = base_weight(_record(), settings)

    for _ in range(500):
        weight = compute_weight(_record(), settings, rng)
        assert weight > 0
        assert base * 900 <= weight <= base * 1100


def test_jitter_is_reproducible_with_seed() -> None:
    settings = SelectionSettings()

    first = [jitter_permille(settings, random.Random(3)) for _ in range(3)]
    second = [jitter_permille(settings, random.Random(3)) for _ in range(3)]

    assert first == second


def test_smallest_weights_stay_positive() -> None:
    settings = SelectionSettings(core=1, nondeprecated=1, words={"pona": 1}, jitter=(1, 1))

    assert compute_weight(_record(), settings, random.Random()) == 1


@pytest.mark.parametrize("category", list(UsageCategory))
def test_every_category_has_a_weight(category: UsageCategory) -> None:
    assert base_weight(_record(category=category), SelectionSettings()) > 0
