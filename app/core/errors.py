class AppError(Exception):
    """Base for every failure a handler turns into a structured error response."""

    status_code: int = 500
    kind: str = "InternalFailure"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class BadRequestError(AppError):
    status_code = 400
    kind = "BadRequest"


class UnauthorizedError(AppError):
    status_code = 401
    kind = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    kind = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    kind = "NotFound"


class InternalFailureError(AppError):
    status_code = 500
    kind = "InternalFailure"


class StorageError(InternalFailureError):
    pass


class MediaToolError(InternalFailureError):
    """An external media process failed; ``stderr`` is passed through verbatim."""

    def __init__(self, tool: str, message: str, stderr: str = ""):
        detail = f"{tool} {message}"
        if stderr:
            detail = f"{detail}: {stderr.strip()}"
        super().__init__(detail)
        self.tool = tool
        self.stderr = stderr
