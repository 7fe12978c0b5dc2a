"""Domain events for the Submission aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from shopform.domain import shopform


@shopform.event(part_of="Submission")
class SubmissionReceived:
    """A storefront visitor submitted a registration or a product review."""

    __version__ = 1

    submission_id = Identifier(required=True)
    shop = String(required=True)
    kind = String(required=True)
    product_id = Identifier()
    rating = Integer()
    has_image = Boolean(default=False)
    submitted_at = DateTime(required=True)
