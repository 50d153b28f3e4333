"""Map free-text frequency answers onto the S/A/N buckets.

Source data mixes "Siempre", "Casi siempre", "A veces", "Casi nunca" and
"Nunca" with arbitrary casing and whitespace. Classification is by substring
so the "casi" variants fall into the same bucket as their base answer.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from src.reporting.models import Bucket

# Checked in order; the first marker found wins.
_MARKERS: Tuple[Tuple[str, Bucket], ...] = (
    ("siempre", Bucket.ALWAYS),
    ("veces", Bucket.SOMETIMES),
    ("nunca", Bucket.NEVER),
)


def classify(answer: object) -> Optional[Bucket]:
    """Return the bucket for *answer*, or ``None`` if it is unrecognized."""
    if not isinstance(answer, str):
        return None
    text = answer.strip().lower()
    for marker, bucket in _MARKERS:
        if marker in text:
            return bucket
    return None


def tally(answers: Iterable[object]) -> dict[Bucket, int]:
    """Count recognized *answers* per bucket; unrecognized ones are skipped."""
    counts = {bucket: 0 for bucket in Bucket}
    for answer in answers:
        bucket = classify(answer)
        if bucket is not None:
            counts[bucket] += 1
    return counts
