"""SubmitForm: accepts a storefront registration or product review.

The handler does not decide the submission kind; that is the aggregate's
job. It only persists what `Submission.receive` accepts.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shopform.domain import shopform
from shopform.submission.submission import Submission

logger = structlog.get_logger(__name__)


@shopform.command(part_of="Submission")
class SubmitForm:
    shop = String(required=True, max_length=255, sanitize=False)
    username = String(max_length=255, sanitize=False)
    email = String(max_length=254, sanitize=False)
    message = Text(sanitize=False)
    rating = Integer()
    product_id = Identifier()
    product_title = String(max_length=255, sanitize=False)
    image_url = String(max_length=1000, sanitize=False)


@shopform.command_handler(part_of=Submission)
class SubmitFormHandler:
    @handle(SubmitForm)
    def submit_form(self, command):
        submission = Submission.receive(
            shop=command.shop,
            username=command.username,
            email=command.email,
            message=command.message,
            rating=command.rating,
            product_id=command.product_id,
            product_title=command.product_title,
            image_url=command.image_url,
        )
        current_domain.repository_for(Submission).add(submission)

        logger.info(
            "Submission stored",
            submission_id=str(submission.id),
            shop=submission.shop,
            kind=submission.kind,
        )
        return str(submission.id)
