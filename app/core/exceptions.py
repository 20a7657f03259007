from typing import Any, Dict, Optional
from fastapi import status

class BaseAPIException(Exception):
    """
    Base class for every custom error raised by the service.
    Keeps the error format returned to API consumers uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class BadRequestException(BaseAPIException):
    """400: the request could not be understood (bad body, bad id...)"""
    def __init__(self, message: str = "Bad Request", details: dict = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STORE ERRORS
# =========================================================

class StoreError(BaseAPIException):
    """
    500: the relational store rejected a statement or could not be reached
    (constraint violation, lost connection, broken query).

    The store's own message is passed through untouched.
    """
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
