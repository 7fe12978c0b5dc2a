"""FastAPI routes for storefront submissions.

The host platform's app proxy forwards storefront requests to the
``/userdata`` prefix with the shop passed as a query parameter. Routes
translate between pydantic schemas and Protean commands; validation and
persistence live in the domain.
"""

import json
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from protean.utils.globals import current_domain
from starlette.datastructures import UploadFile

from shopform.api.schemas import (
    AverageRatingResponse,
    StatusResponse,
    SubmissionListResponse,
    SubmissionResponse,
    SubmitFormRequest,
    SubmitFormResponse,
)
from shopform.media import get_image_store
from shopform.submission.deletion import DeleteSubmission
from shopform.submission.intake import SubmitForm
from shopform.submission.queries import rating_summary, submissions_for_shop
from shopform.submission.submission import Submission, SubmissionKind
from shopform.utils.logging import get_logger

logger = get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

userdata_router = APIRouter(prefix="/userdata", tags=["userdata"])

_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

_SUCCESS_MESSAGES = {
    SubmissionKind.REGISTRATION.value: "Form submitted successfully",
    SubmissionKind.REVIEW.value: "Review submitted successfully",
}


async def _read_payload(request: Request) -> tuple[dict, UploadFile | None]:
    """Return the submitted fields and the optional image upload."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        upload = form.get("image")
        fields = {key: value for key, value in form.items() if key != "image"}
        if not isinstance(upload, UploadFile) or not upload.filename:
            upload = None
        return fields, upload

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Request body must be JSON or form data") from None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be JSON or form data")
    return payload, None


def _public_scheme(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-proto")
    return forwarded.split(",")[0].strip() if forwarded else request.url.scheme


# ---------------------------------------------------------------------------
# Submission intake
# ---------------------------------------------------------------------------
@userdata_router.post("/submit-form", response_model=SubmitFormResponse)
async def submit_form(request: Request, shop: str | None = None) -> SubmitFormResponse:
    """Store a registration (name + email) or a product review."""
    if not shop:
        raise HTTPException(status_code=400, detail="Missing shop parameter")

    fields, upload = await _read_payload(request)
    body = SubmitFormRequest.model_validate(fields)

    image_store = get_image_store()
    image_name = await image_store.save(upload) if upload is not None else None
    image_url = (
        image_store.public_url(_public_scheme(request), request.headers.get("host", request.url.netloc), image_name)
        if image_name
        else None
    )

    try:
        command = SubmitForm(
            shop=shop,
            username=body.username,
            email=body.email,
            message=body.message,
            rating=body.rating,
            product_id=body.product_id,
            product_title=body.product_title,
            image_url=image_url,
        )
        submission_id = current_domain.process(command, asynchronous=False)
    except Exception:
        if image_name:
            image_store.discard(image_name)
        raise

    submission = current_domain.repository_for(Submission).get(submission_id)
    return SubmitFormResponse(
        message=_SUCCESS_MESSAGES[submission.kind],
        data=SubmissionResponse.from_submission(submission),
    )


# ---------------------------------------------------------------------------
# Listing and aggregation
# ---------------------------------------------------------------------------
@userdata_router.get("/userinfo", response_model=SubmissionListResponse)
async def list_submissions(
    shop: str | None = None,
    kind: SubmissionKind | None = None,
) -> SubmissionListResponse:
    """All submissions of a shop, newest first."""
    if not shop:
        raise HTTPException(status_code=400, detail="Missing shop parameter")

    submissions = submissions_for_shop(shop, kind)
    return SubmissionListResponse(
        data=[SubmissionResponse.from_submission(s) for s in submissions],
        count=len(submissions),
    )


@userdata_router.get("/average-rating", response_model=AverageRatingResponse)
async def get_average_rating(
    shop: str | None = None,
    product_id: str | None = Query(default=None, alias="productId"),
) -> AverageRatingResponse:
    """Mean star rating of a product, rounded to one decimal."""
    if not shop or not product_id:
        raise HTTPException(status_code=400, detail="Missing shop or productId")

    summary = rating_summary(shop, product_id)
    return AverageRatingResponse(average=summary.average, count=summary.count)


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------
@userdata_router.delete("/submission/{submission_id}", response_model=StatusResponse)
async def delete_submission(submission_id: str, shop: str | None = None) -> StatusResponse:
    """Delete a submission by id, optionally scoped to a shop."""
    current_domain.process(DeleteSubmission(submission_id=submission_id, shop=shop), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Admin page
# ---------------------------------------------------------------------------
@userdata_router.get("/admin", response_class=HTMLResponse)
async def admin_page(request: Request, shop: str | None = None):
    """Render a shop's submissions as a standalone HTML page."""
    if not shop:
        return PlainTextResponse("Shop parameter required", status_code=400)

    try:
        submissions = [SubmissionResponse.from_submission(s) for s in submissions_for_shop(shop)]
        return templates.TemplateResponse(
            request,
            "admin.html",
            {"shop": shop, "submissions": submissions, "count": len(submissions)},
        )
    except Exception:
        logger.exception("Admin page failed", shop=shop)
        return PlainTextResponse("Internal server error", status_code=500)
