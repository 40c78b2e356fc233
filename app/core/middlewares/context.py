"""요청 ID 컨텍스트 관리"""

import contextvars
import uuid
from typing import Optional

# 클라이언트가 보낸 요청 ID 최대 길이 (초과 시 새로 생성)
MAX_REQUEST_ID_LENGTH = 128

# 요청 ID를 저장하는 컨텍스트 변수
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정

    비어 있거나 너무 긴 값이면 UUID4로 새로 생성합니다.
    """
    if not request_id or len(request_id) > MAX_REQUEST_ID_LENGTH:
        request_id = str(uuid.uuid4())
    request_id_ctx.set(request_id)
    return request_id
