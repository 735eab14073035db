"""
Domain errors raised by the CRUD layer and translated to HTTP by the routers.
"""
from fastapi import HTTPException, status

UNAUTHORIZED_MSG = "Unauthorized: User must be authenticated"
PROJECT_ACCESS_MSG = "Project not found or access denied"


class ScaleAdvisorError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_http(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=str(self))


class UnauthorizedError(ScaleAdvisorError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = UNAUTHORIZED_MSG):
        super().__init__(message)


class ProjectAccessError(ScaleAdvisorError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = PROJECT_ACCESS_MSG):
        super().__init__(message)


class RecordAccessError(ScaleAdvisorError):
    """A child record is missing, or belongs to someone else's project."""
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ScaleAdvisorError):
    status_code = 422

    def __init__(self, message: str):
        if not message.startswith("Validation error:"):
            message = f"Validation error: {message}"
        super().__init__(message)
