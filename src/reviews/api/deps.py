"""Request-scoped dependencies: who is calling, and from where.

Credential verification happens upstream (gateway or session middleware);
by the time a request reaches these routes the caller's identity is carried
in the ``X-User-Id`` and ``X-User-Role`` headers.
"""

from fastapi import Header, Request

from reviews.policy import Actor

MODERATOR_ROLE = "moderator"


async def current_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor:
    if not x_user_id:
        return Actor.anonymous()
    if (x_user_role or "").strip().lower() == MODERATOR_ROLE:
        return Actor.moderator(x_user_id)
    return Actor.user(x_user_id)


def origin_address(request: Request) -> str | None:
    return request.client.host if request.client else None


def request_locale(request: Request) -> str | None:
    """First language tag of the Accept-Language header, e.g. ``de-CH``."""
    header = request.headers.get("accept-language")
    if not header:
        return None
    tag = header.split(",")[0].split(";")[0].strip()
    return tag[:35] or None
