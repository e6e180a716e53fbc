"""
请求日志中间件
"""

import logging
import time
import uuid
from typing import Callable, Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"

# 静态文件、文档与探活请求不记录
DEFAULT_SKIP_PREFIXES = ("/uploads/", "/health", "/api-docs", "/openapi.json", "/favicon.ico")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    为每个请求分配请求ID并统计耗时

    调用方带 X-Request-ID 时沿用，否则生成 8 位短ID；ID 同时写入 request.state。
    只有慢请求、4xx/5xx 与未处理异常会写日志。
    """

    def __init__(
        self,
        app: ASGIApp,
        skip_paths: Optional[Iterable[str]] = None,
        slow_request_threshold: float = 1.0
    ):
        super().__init__(app)
        self.skip_prefixes = tuple(skip_paths) if skip_paths else DEFAULT_SKIP_PREFIXES
        self.slow_request_threshold = slow_request_threshold

    def _should_skip(self, path: str) -> bool:
        return path.startswith(self.skip_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if self._should_skip(request.url.path):
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        label = f"[{request_id}] {request.method} {request.url.path}"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"{label} 未处理异常 ({(time.perf_counter() - started) * 1000:.1f}ms): {e}")
            raise

        elapsed = time.perf_counter() - started
        elapsed_ms = round(elapsed * 1000, 2)

        if elapsed > self.slow_request_threshold:
            logger.warning(f"{label} 慢请求 {response.status_code} {elapsed_ms}ms")
        elif response.status_code >= 500:
            logger.error(f"{label} -> {response.status_code} {elapsed_ms}ms")
        elif response.status_code >= 400:
            logger.warning(f"{label} -> {response.status_code} {elapsed_ms}ms")

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms}ms"
        return response
