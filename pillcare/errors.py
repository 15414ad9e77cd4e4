"""Errors surfaced to API callers as ``{"error": message}``."""


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = 400
    message = "Bad request"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class MethodNotAllowed(ApiError):
    status_code = 405
    message = "Method not allowed"


class InternalError(ApiError):
    pass
