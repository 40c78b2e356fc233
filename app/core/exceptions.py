from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger
from app.core.schemas import create_error_response

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """전역 에러 코드"""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"


# HTTP 상태 코드별 기본 에러 코드
STATUS_ERROR_CODES: Dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
}


class BaseAPIException(HTTPException):
    """기본 API 예외 클래스"""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        detail: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.detail_info = detail or {}
        super().__init__(status_code=status_code, detail=message)


class BadRequestException(BaseAPIException):
    """400 Bad Request"""

    def __init__(
        self,
        message: str = "Bad request",
        error_code: str = ErrorCode.BAD_REQUEST,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class NotFoundException(BaseAPIException):
    """404 Not Found"""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: str = ErrorCode.NOT_FOUND,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            message=message,
            detail=detail,
        )


def error_code_value(code: Any) -> str:
    """Enum 에러 코드를 문자열 값으로 변환"""
    return str(getattr(code, "value", code))


def _error_json(
    status_code: int, message: str, error: Optional[str], data: Any = None
) -> JSONResponse:
    """평면 엔벨로프 형태의 에러 응답 생성"""
    body = create_error_response(message=message, error=error, data=data)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json")
    )


async def base_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """BaseAPIException 핸들러"""
    return _error_json(
        exc.status_code,
        exc.message,
        error_code_value(exc.error_code),
        data=exc.detail_info or None,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 유효성 검사 실패 핸들러 (400으로 응답)"""
    errors = jsonable_encoder(exc.errors())
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", []))
        msg = str(first.get("msg"))
        message = f"{loc}: {msg}" if loc else msg
    else:
        message = "Invalid request"
    return _error_json(
        status.HTTP_400_BAD_REQUEST,
        message,
        ErrorCode.VALIDATION_ERROR.value,
        data=errors,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """HTTPException 핸들러"""
    code = STATUS_ERROR_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return _error_json(exc.status_code, str(exc.detail), code.value)


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """일반 예외 핸들러"""
    logger.exception(
        f"Unhandled exception on {request.method} {request.url.path}"
    )
    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        ErrorCode.INTERNAL_ERROR.value,
    )
