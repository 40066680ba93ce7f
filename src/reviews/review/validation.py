"""Review draft validation.

Pure functions: a draft (a mapping of submitted fields) goes in, a normalized
mapping comes out, or a ``ValidationError`` carrying every field problem at
once is raised.
"""

import re

from protean.exceptions import ValidationError

INVALID_RATING = "InvalidRating: rating must be a whole number between 1 and 5"
MISSING_BODY = "MissingBody: review text cannot be blank"
PRODUCT_NOT_FOUND = "ProductNotFound: product does not exist"
USER_NOT_FOUND = "UserNotFound: user does not exist"

MIN_RATING = 1
MAX_RATING = 5
TITLE_MAX_LENGTH = 200
REVIEWER_NAME_MAX_LENGTH = 100

# "5 stars" -> "5"
_TRAILING_NON_DIGITS = re.compile(r"\s*[^0-9]*\Z")

CONTENT_FIELDS = ("rating", "title", "body", "reviewer_name", "show_identifier")


def normalize_rating(value) -> int:
    """Parse a submitted rating, tolerating a trailing non-numeric suffix.

    Raises ``ValueError`` when nothing usable remains or the value is out of
    range.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(value)

    if isinstance(value, int):
        score = value
    else:
        text = _TRAILING_NON_DIGITS.sub("", str(value)).strip()
        if not text.isdigit():
            raise ValueError(value)
        score = int(text)

    if not MIN_RATING <= score <= MAX_RATING:
        raise ValueError(value)
    return score


def _optional_text(value, field_name, max_length, errors):
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if len(text) > max_length:
        errors.setdefault(field_name, []).append(f"{field_name} cannot exceed {max_length} characters")
    return text


def validate_draft(draft: dict, partial: bool = False) -> dict:
    """Validate and normalize review content.

    With ``partial=True`` only the keys present in ``draft`` are checked, which
    is how updates are validated. Unknown keys are ignored.
    """
    errors: dict[str, list[str]] = {}
    normalized: dict = {}

    if not partial or "rating" in draft:
        try:
            normalized["rating"] = normalize_rating(draft.get("rating"))
        except ValueError:
            errors.setdefault("rating", []).append(INVALID_RATING)

    if not partial or "body" in draft:
        body = draft.get("body")
        body = str(body).strip() if body is not None else ""
        if not body:
            errors.setdefault("body", []).append(MISSING_BODY)
        else:
            normalized["body"] = body

    if not partial or "title" in draft:
        normalized["title"] = _optional_text(draft.get("title"), "title", TITLE_MAX_LENGTH, errors)

    if not partial or "reviewer_name" in draft:
        normalized["reviewer_name"] = _optional_text(
            draft.get("reviewer_name"), "reviewer_name", REVIEWER_NAME_MAX_LENGTH, errors
        )

    if not partial or "show_identifier" in draft:
        show = draft.get("show_identifier")
        normalized["show_identifier"] = True if show is None else bool(show)

    if errors:
        raise ValidationError(errors)

    return normalized
