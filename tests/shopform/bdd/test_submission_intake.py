"""BDD tests for registrations, reviews and product ratings."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from shopform.submission.intake import SubmitForm
from shopform.submission.queries import rating_summary
from shopform.submission.submission import Submission

scenarios("features/submission_intake.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('product "{product_id}" in shop "{shop}" has ratings {ratings}'))
def product_has_ratings(product_id, shop, ratings):
    for score in ratings.split(","):
        current_domain.process(
            SubmitForm(
                shop=shop,
                username="Reviewer",
                message="Rated",
                rating=int(score),
                product_id=product_id,
            ),
            asynchronous=False,
        )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('a visitor submits username "{username}" and email "{email}" to shop "{shop}"'),
    target_fixture="submission",
)
def visitor_registers(username, email, shop, error):
    try:
        return Submission.receive(shop=shop, username=username, email=email)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(
    parsers.cfparse('a visitor submits username "{username}" without email to shop "{shop}"'),
    target_fixture="submission",
)
def visitor_registers_without_email(username, shop, error):
    try:
        return Submission.receive(shop=shop, username=username)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(
    parsers.cfparse(
        'a visitor reviews product "{product_id}" with {rating:d} stars and message "{message}" in shop "{shop}"'
    ),
    target_fixture="submission",
)
def visitor_reviews(product_id, rating, message, shop, error):
    try:
        return Submission.receive(
            shop=shop,
            username="Ada",
            message=message,
            rating=rating,
            product_id=product_id,
        )
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(
    parsers.cfparse('a visitor submits a product title "{title}" without review content to shop "{shop}"'),
    target_fixture="submission",
)
def visitor_submits_title_only(title, shop, error):
    try:
        return Submission.receive(shop=shop, username="Ada", product_title=title)
    except ValidationError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the submission email is "{email}"'))
def submission_email_is(submission, email):
    assert submission.email == email


@then(parsers.cfparse("the submission rating is {rating:d}"))
def submission_rating_is(submission, rating):
    assert submission.rating.score == rating


@then(
    parsers.cfparse(
        'the average rating of product "{product_id}" in shop "{shop}" is {average:f} over {count:d} reviews'
    )
)
def average_rating_is(product_id, shop, average, count):
    summary = rating_summary(shop, product_id)
    assert summary.average == average
    assert summary.count == count


@then(parsers.cfparse('the average rating of product "{product_id}" in shop "{shop}" is empty'))
def average_rating_is_empty(product_id, shop):
    summary = rating_summary(shop, product_id)
    assert summary.average is None
    assert summary.count == 0
