"""요청/응답 로깅 미들웨어"""

from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger
from app.core.middlewares.context import set_request_id
from app.core.utils.time import measure_time

logger = get_logger(__name__)

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 로깅 및 처리 시간 측정 미들웨어

    요청 ID는 헤더(X-Request-ID)에서 가져오거나 새로 생성하며,
    서비스 계층 로그에서 get_request_id()로 조회할 수 있습니다.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        target = f"{request.method} {request.url.path}"
        client = request.client.host if request.client else "unknown"

        logger.info(f"→ {target} | Client: {client}")

        try:
            with measure_time() as timer:
                response = await call_next(request)
        except Exception as e:
            logger.error(
                f"✗ {target} | Error: {e} "
                f"| Time: {timer['elapsed_ms']:.2f}ms"
            )
            raise

        process_time = timer["elapsed_ms"]
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{process_time:.2f}ms"

        if response.status_code < 400:
            logger.info(
                f"✓ {target} | Status: {response.status_code} "
                f"| Time: {process_time:.2f}ms"
            )
        else:
            logger.warning(
                f"✗ {target} | Status: {response.status_code} "
                f"| Time: {process_time:.2f}ms"
            )

        return cast(Response, response)
