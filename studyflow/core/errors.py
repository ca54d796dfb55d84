"""Error taxonomy shared by the routers; each class maps to one HTTP status."""


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidInputError(AppError):
    status_code = 400
    message = "Invalid request data"


class UploadRejectedError(AppError):
    status_code = 400
    message = "Upload rejected"


class UnauthorizedError(AppError):
    status_code = 401
    message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ServiceUnavailableError(AppError):
    status_code = 503
    message = "Service unavailable"
