"""Read-side helpers over the Submission store.

Averages are computed on read from the stored ratings, so deleting a
review is reflected immediately without any bookkeeping.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from shopform.submission.submission import Submission, SubmissionKind


@dataclass(frozen=True)
class RatingSummary:
    average: float | None
    count: int


def average_rating(scores) -> float | None:
    """Arithmetic mean rounded half-up to one decimal, or None when empty."""
    scores = list(scores)
    if not scores:
        return None
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def submissions_for_shop(shop: str, kind: SubmissionKind | None = None) -> list[Submission]:
    """All submissions of a shop, newest first."""
    criteria = {"shop": shop}
    if kind is not None:
        criteria["kind"] = kind.value

    repo = current_domain.repository_for(Submission)
    return repo._dao.query.filter(**criteria).order_by("-submitted_at").limit(None).all().items


def rating_summary(shop: str, product_id: str) -> RatingSummary:
    """Average rating of one product in one shop, over rated submissions only."""
    repo = current_domain.repository_for(Submission)
    submissions = repo._dao.query.filter(shop=shop, product_id=product_id).limit(None).all().items

    scores = [s.rating.score for s in submissions if s.rating is not None]
    return RatingSummary(average=average_rating(scores), count=len(scores))
