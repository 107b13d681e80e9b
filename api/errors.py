"""
api/errors.py -- Error taxonomy of the JSON API.

Handlers raise these; the exception handlers registered in api/main.py render
them into the common envelope, translating message_id with the request's
"API" translator:

    {"errors": [{"code": "...", "message": "..."}]}

InvalidBody additionally carries the validation issues:

    {"message": "...", "errors": [{"path": [...], "message": "...", "code": "..."}]}
"""

from __future__ import annotations

from collections.abc import Sequence

from core.validation import Issue


class ApiError(Exception):
    status_code: int = 500
    code: str = "server_error"
    message_id: str = "serverError"

    def __init__(self, message_id: str | None = None) -> None:
        if message_id is not None:
            self.message_id = message_id
        super().__init__(self.message_id)


class MissingParams(ApiError):
    status_code = 400
    code = "missing_params"
    message_id = "pageAndlimitAreRequired"


class Unauthenticated(ApiError):
    status_code = 401
    code = "unauthenticated"
    message_id = "notAuthorized"


class NotAMember(ApiError):
    status_code = 401
    code = "not_a_member"
    message_id = "userIsNotAMember"


class UnknownCompany(ApiError):
    status_code = 404
    code = "unknown_company"
    message_id = "invalidCompanyId"


class UnknownRecord(ApiError):
    status_code = 404
    code = "unknown_record"
    message_id = "recordNotFound"


class InvalidBody(ApiError):
    status_code = 400
    code = "invalid_body"
    message_id = "invalidRequest"

    def __init__(self, issues: Sequence[Issue]) -> None:
        super().__init__()
        self.issues = list(issues)


class BadRequest(ApiError):
    status_code = 400
    code = "bad_request"
    message_id = "invalidRequest"


class Conflict(ApiError):
    status_code = 409
    code = "conflict"


class UnknownStoreError(ApiError):
    """Any persistence failure that is not a known constraint violation."""
