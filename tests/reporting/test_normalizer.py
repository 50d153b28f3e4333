"""Unit tests for reporting.normalizer."""
from __future__ import annotations

import pytest

from src.reporting.models import Bucket
from src.reporting.normalizer import classify, tally


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("Siempre", Bucket.ALWAYS),
        ("  CASI SIEMPRE ", Bucket.ALWAYS),
        ("A veces", Bucket.SOMETIMES),
        ("Casi nunca", Bucket.NEVER),
        ("nunca", Bucket.NEVER),
    ],
)
def test_classify_known_answers(answer, expected):
    assert classify(answer) is expected


@pytest.mark.parametrize("answer", ["", "No sé", None, 3, ["Siempre"]])
def test_classify_unrecognized(answer):
    assert classify(answer) is None


def test_siempre_takes_priority_over_nunca():
    assert classify("Nunca o siempre") is Bucket.ALWAYS


def test_tally_skips_unrecognized():
    counts = tally(["Siempre", "A veces", "foo", None, "Nunca", "casi siempre"])
    assert counts == {Bucket.ALWAYS: 2, Bucket.SOMETIMES: 1, Bucket.NEVER: 1}
