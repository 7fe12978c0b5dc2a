"""Submission aggregate: a storefront registration or product review.

Both shapes share one storage layout. The kind is never supplied by the
caller; it is derived from which fields are present:

    Registration: username + email, no review fields
    Review:       username + message + rating + product_id
                  (email, product_title and image_url optional)

Submissions are immutable once stored. The only lifecycle operation is
deletion by id.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text, ValueObject

from shopform.domain import shopform
from shopform.submission.events import SubmissionReceived


class SubmissionKind(Enum):
    REGISTRATION = "Registration"
    REVIEW = "Review"


# Presence of any of these turns a submission into a review
REVIEW_FIELDS = ("message", "rating", "product_id", "product_title", "image_url")

REQUIRED_FIELDS = {
    SubmissionKind.REGISTRATION: ("username", "email"),
    SubmissionKind.REVIEW: ("username", "message", "rating", "product_id"),
}

_FORBIDDEN_EMAIL_CHARS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _clean(value):
    """Strip strings and collapse blanks to None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def classify(values: dict) -> SubmissionKind:
    """Select the rule set for a payload by looking for review-only fields."""
    if any(_clean(values.get(name)) is not None for name in REVIEW_FIELDS):
        return SubmissionKind.REVIEW
    return SubmissionKind.REGISTRATION


def missing_fields(kind: SubmissionKind, values: dict) -> list[str]:
    return [name for name in REQUIRED_FIELDS[kind] if _clean(values.get(name)) is None]


def is_valid_email(email: str) -> bool:
    """Structural check: one @, non-empty dotted domain, no forbidden characters."""
    if any(ch.isspace() for ch in email) or email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part:
        return False
    if domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in local_part or ".." in domain_part:
        return False
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    return not any(ch in email for ch in _FORBIDDEN_EMAIL_CHARS)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@shopform.value_object(part_of="Submission")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@shopform.aggregate
class Submission:
    """A registration or review submitted from a shop's storefront."""

    shop = String(required=True, max_length=255, sanitize=False)
    kind = String(choices=SubmissionKind, required=True)

    # Visitor
    username = String(required=True, max_length=255, sanitize=False)
    email = String(max_length=254, sanitize=False)

    # Review content
    message = Text(sanitize=False)
    rating = ValueObject(Rating)
    product_id = Identifier()
    product_title = String(max_length=255, sanitize=False)
    image_url = String(max_length=1000, sanitize=False)

    submitted_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def registration_carries_no_review_fields(self):
        if self.kind != SubmissionKind.REGISTRATION.value:
            return
        present = [name for name in REVIEW_FIELDS if getattr(self, name) is not None]
        if present:
            raise ValidationError({name: ["Not allowed on a registration"] for name in present})

    @invariant.post
    def review_has_required_content(self):
        if self.kind != SubmissionKind.REVIEW.value:
            return
        missing = [name for name in ("message", "rating", "product_id") if getattr(self, name) is None]
        if missing:
            raise ValidationError({name: ["is required"] for name in missing})

    @invariant.post
    def registration_requires_email(self):
        if self.kind == SubmissionKind.REGISTRATION.value and not self.email:
            raise ValidationError({"email": ["is required"]})

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not is_valid_email(self.email):
            raise ValidationError({"email": ["Invalid email address"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def receive(
        cls,
        shop,
        username=None,
        email=None,
        message=None,
        rating=None,
        product_id=None,
        product_title=None,
        image_url=None,
    ):
        """Normalise, classify and validate a raw submission, then build it.

        All missing fields for the selected kind are reported together.
        """
        values = {
            "shop": _clean(shop),
            "username": _clean(username),
            "email": _clean(email),
            "message": _clean(message),
            "rating": rating,
            "product_id": _clean(product_id),
            "product_title": _clean(product_title),
            "image_url": _clean(image_url),
        }
        if values["email"]:
            values["email"] = values["email"].lower()

        kind = classify(values)

        missing = missing_fields(kind, values)
        if values["shop"] is None:
            missing.insert(0, "shop")
        if missing:
            raise ValidationError({name: ["is required"] for name in missing})

        now = datetime.now(UTC)
        submission = cls(
            shop=values["shop"],
            kind=kind.value,
            username=values["username"],
            email=values["email"],
            message=values["message"],
            rating=Rating(score=rating) if rating is not None else None,
            product_id=values["product_id"],
            product_title=values["product_title"],
            image_url=values["image_url"],
            submitted_at=now,
        )

        submission.raise_(
            SubmissionReceived(
                submission_id=str(submission.id),
                shop=submission.shop,
                kind=kind.value,
                product_id=str(submission.product_id) if submission.product_id else None,
                rating=rating,
                has_image=submission.image_url is not None,
                submitted_at=now,
            )
        )

        return submission
