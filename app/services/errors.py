from __future__ import annotations


class SocialGraphError(ValueError):
    """Base for social graph outcomes the API layer maps to a client error.

    `str(exc)` is the machine code, which `app.api.http_errors.value_error`
    looks up in its status table.
    """

    code = "social_graph_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class NotFound(SocialGraphError):
    code = "not_found"


class InvalidTarget(SocialGraphError):
    code = "invalid_target"


class DuplicateRequest(SocialGraphError):
    code = "duplicate_request"


class AlreadyFriends(SocialGraphError):
    code = "already_friends"


class InvalidState(SocialGraphError):
    code = "invalid_state"


class Forbidden(PermissionError):
    code = "forbidden"
