"""DeleteSubmission: removes a stored submission by id.

When a shop is given, a submission belonging to another shop is reported
as not found rather than deleted.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopform.domain import shopform
from shopform.submission.submission import Submission

logger = structlog.get_logger(__name__)


@shopform.command(part_of="Submission")
class DeleteSubmission:
    submission_id = Identifier(required=True)
    shop = String(max_length=255)


@shopform.command_handler(part_of=Submission)
class DeleteSubmissionHandler:
    @handle(DeleteSubmission)
    def delete_submission(self, command):
        repo = current_domain.repository_for(Submission)
        submission = repo.get(command.submission_id)

        if command.shop and submission.shop != command.shop:
            raise ObjectNotFoundError(
                f"Submission with identifier {command.submission_id} does not exist in shop {command.shop}"
            )

        repo._dao.delete(submission)

        logger.info(
            "Submission deleted",
            submission_id=str(command.submission_id),
            shop=submission.shop,
            kind=submission.kind,
        )
