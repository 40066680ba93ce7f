"""Map Reviews domain errors to HTTP responses.

Protean's own handlers (``register_exception_handlers``) cover
``ValidationError``; the handlers below add the policy and conflict errors
raised by this bounded context.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError

from reviews.api.schemas import ErrorResponse
from reviews.exceptions import AlreadyReviewed, DuplicateVote, Forbidden, ReviewNotApproved


def _error(status_code: int, error: str, detail: str, existing_id: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, existing_id=existing_id)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def forbidden_handler(request: Request, exc: Forbidden) -> JSONResponse:
    return _error(403, "Forbidden", exc.message)


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "NotFound", "The requested resource does not exist")


async def already_reviewed_handler(request: Request, exc: AlreadyReviewed) -> JSONResponse:
    return _error(409, "AlreadyReviewed", exc.message, existing_id=exc.existing_review_id)


async def duplicate_vote_handler(request: Request, exc: DuplicateVote) -> JSONResponse:
    return _error(409, "DuplicateVote", exc.message, existing_id=exc.existing_vote_id)


async def review_not_approved_handler(request: Request, exc: ReviewNotApproved) -> JSONResponse:
    return _error(422, "ReviewNotApproved", exc.message)


def register_review_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Forbidden, forbidden_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AlreadyReviewed, already_reviewed_handler)
    app.add_exception_handler(DuplicateVote, duplicate_vote_handler)
    app.add_exception_handler(ReviewNotApproved, review_not_approved_handler)
