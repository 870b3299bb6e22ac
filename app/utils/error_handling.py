"""
Orca Payroll - Error Responses

Every failure leaves the API in one JSON envelope:

    {"success": false, "error": {"code", "message", "timestamp", "field"?, "details"?}}

Services raise the `AppException` subclasses below; FastAPI, Starlette and
SQLAlchemy errors that escape a route are mapped onto the same envelope by
the handlers registered in `setup_exception_handlers`.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
from uuid import UUID
import logging

from fastapi import FastAPI, Request, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError,
    OperationalError,
    DataError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("orca.errors")


class ErrorCode(str, Enum):
    """Machine-readable codes carried in error.code"""

    # Request problems
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_MONTH = "INVALID_MONTH"

    # Access (raised as HTTPException by the auth dependencies)
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Payroll records
    NOT_FOUND = "NOT_FOUND"
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    SALARY_RECORD_NOT_FOUND = "SALARY_RECORD_NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    DUPLICATE_SALARY_MONTH = "DUPLICATE_SALARY_MONTH"

    # Dashboard reads
    DATA_LOAD_FAILED = "DATA_LOAD_FAILED"

    # Storage
    DATABASE_ERROR = "DATABASE_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DATA_INTEGRITY_ERROR = "DATA_INTEGRITY_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"


def _utc_stamp(moment: Optional[datetime] = None) -> str:
    return (moment or datetime.utcnow()).isoformat() + "Z"


def _error_body(
    code: ErrorCode,
    message: str,
    timestamp: str,
    field: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code.value, "message": message, "timestamp": timestamp}
    if field:
        error["field"] = field
    if details:
        error["details"] = details
    return error


class AppException(Exception):
    """Base for errors raised by Orca services. Carries its own HTTP status."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.field = field
        self.original_error = original_error
        self.timestamp = datetime.utcnow()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return _error_body(self.code, self.message, _utc_stamp(self.timestamp), self.field, self.details)


class InvalidMonthException(AppException):
    """Month string is not YYYY-MM or YYYY-MM-DD"""

    def __init__(self, value: Any, field: str = "month"):
        super().__init__(
            code=ErrorCode.INVALID_MONTH,
            message=f"Invalid month: {value!r}. Expected YYYY-MM or YYYY-MM-DD.",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"provided": str(value)},
            field=field,
        )


class NotFoundException(AppException):
    """A lookup by id found nothing"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[Union[str, UUID]] = None,
        code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        label = f"{resource_type} '{resource_id}'" if resource_id else resource_type
        super().__init__(
            code=code,
            message=f"{label} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": str(resource_id) if resource_id else None},
        )


class EmployeeNotFoundException(NotFoundException):

    def __init__(self, employee_id: Union[str, UUID]):
        super().__init__("Employee", employee_id, code=ErrorCode.EMPLOYEE_NOT_FOUND)


class SalaryRecordNotFoundException(NotFoundException):

    def __init__(self, record_id: Union[str, UUID]):
        super().__init__("SalaryRecord", record_id, code=ErrorCode.SALARY_RECORD_NOT_FOUND)


class DuplicateEntryException(AppException):
    """
    A unique value is already taken: a currency code, a department name,
    a user email, or a second salary record for the same employee and month.
    """

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: str,
        code: ErrorCode = ErrorCode.DUPLICATE_ENTRY,
    ):
        super().__init__(
            code=code,
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"field": field, "value": value},
        )


class DataLoadException(AppException):
    """A dashboard panel could not load its source data"""

    def __init__(self, panel: str, original_error: Optional[Exception] = None):
        super().__init__(
            code=ErrorCode.DATA_LOAD_FAILED,
            message=f"Failed to load {panel}",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"panel": panel},
            original_error=original_error,
        )


# ============================================================================
# Handlers
# ============================================================================

# HTTPException status -> code; anything unlisted is reported as INTERNAL_ERROR
HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.INVALID_INPUT,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.RESOURCE_CONFLICT,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ErrorCode.VALIDATION_ERROR,
}


def create_error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
    field: Optional[str] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": _error_body(code, message, _utc_stamp(), field, details)},
    )


def _request_context(request: Request) -> Dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.code.value}: {exc.message}",
        extra={"code": exc.code.value, **_request_context(request)},
        exc_info=exc.original_error,
    )
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.to_dict()})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    logger.warning(f"HTTP {exc.status_code}: {message}", extra=_request_context(request))

    response = create_error_response(
        code=HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR),
        message=message,
        status_code=exc.status_code,
    )
    # WWW-Authenticate on 401s
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Rejected request with {len(errors)} invalid field(s)", extra=_request_context(request))

    return create_error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"errors": errors},
    )


def classify_database_error(exc: SQLAlchemyError) -> tuple:
    """Map a database error to (code, message, status)."""
    if isinstance(exc, IntegrityError):
        reason = str(exc.orig).lower() if exc.orig else ""
        if "unique" in reason or "duplicate" in reason:
            return ErrorCode.DUPLICATE_ENTRY, "A record with this value already exists", status.HTTP_409_CONFLICT
        if "foreign key" in reason:
            return (
                ErrorCode.DATA_INTEGRITY_ERROR,
                "Referenced record does not exist",
                status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        return ErrorCode.DATA_INTEGRITY_ERROR, "Data integrity constraint violated", status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, OperationalError):
        return ErrorCode.CONNECTION_ERROR, "Database is unavailable", status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, DataError):
        return ErrorCode.DATABASE_ERROR, "Value rejected by the database", status.HTTP_422_UNPROCESSABLE_ENTITY
    return ErrorCode.DATABASE_ERROR, "A database error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    code, message, status_code = classify_database_error(exc)
    logger.error(
        f"{type(exc).__name__} while handling request: {exc}",
        extra=_request_context(request),
        exc_info=True,
    )
    return create_error_response(code=code, message=message, status_code=status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.critical(f"Unhandled {type(exc).__name__}: {exc}", extra=_request_context(request), exc_info=True)

    # Internal details stay in the log
    return create_error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message="An unexpected error occurred. Please try again later.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register every handler above on the app"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


class ErrorTrackingMiddleware:
    """Logs any request that escapes the handlers, then re-raises"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            logger.error(
                f"Request to {scope.get('path', 'unknown')} failed",
                extra={
                    "path": scope.get("path"),
                    "method": scope.get("method"),
                    "exception_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise


__all__ = [
    "AppException",
    "ErrorCode",
    "InvalidMonthException",
    "NotFoundException",
    "EmployeeNotFoundException",
    "SalaryRecordNotFoundException",
    "DuplicateEntryException",
    "DataLoadException",
    "classify_database_error",
    "create_error_response",
    "setup_exception_handlers",
    "ErrorTrackingMiddleware",
]
