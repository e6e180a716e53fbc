"""
标准错误体系
提供统一的错误码定义和异常处理

响应体保持与既有客户端兼容：
- 校验失败 / 服务异常: {"error": "..."}
- 资源不存在: {"message": "..."}
"""

import logging
from typing import Optional, Dict
from enum import IntEnum
from fastapi import status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    """
    标准错误码

    错误码规范：
    - 1xxx: 系统级错误
    - 3xxx: 业务通用错误
    - 5xxx: 第三方服务错误
    """

    # ==================== 系统级错误 (1xxx) ====================
    INTERNAL_ERROR = 1000           # 服务器内部错误

    # ==================== 业务通用错误 (3xxx) ====================
    VALIDATION_ERROR = 3001         # 参数验证失败
    RESOURCE_NOT_FOUND = 3002       # 资源不存在
    UPLOAD_FAILED = 3003            # 上传失败

    # ==================== 第三方服务错误 (5xxx) ====================
    EXTERNAL_API_ERROR = 5001       # 外部 API 错误


# 错误码对应的默认消息
ERROR_MESSAGES: Dict[int, str] = {
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
    ErrorCode.VALIDATION_ERROR: "Invalid input.",
    ErrorCode.RESOURCE_NOT_FOUND: "Resource not found",
    ErrorCode.UPLOAD_FAILED: "Upload failed",
    ErrorCode.EXTERNAL_API_ERROR: "External service call failed",
}

# 错误码对应的 HTTP 状态码，未列出的一律 500
ERROR_HTTP_STATUS: Dict[int, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UPLOAD_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class AppException(Exception):
    """
    应用异常基类

    用于抛出业务异常，包含错误码、消息以及响应体使用的键名

    Usage:
        raise AppException(ErrorCode.VALIDATION_ERROR, "Answer array is not in the expected format.")
        raise NotFoundException("Exam")
    """

    body_key = "error"

    def __init__(
        self,
        code: int = ErrorCode.INTERNAL_ERROR,
        message: Optional[str] = None,
        body_key: Optional[str] = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Internal Server Error")
        self.http_status = ERROR_HTTP_STATUS.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if body_key:
            self.body_key = body_key
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {self.body_key: self.message}

    def to_response(self) -> JSONResponse:
        """转换为 JSONResponse"""
        return JSONResponse(status_code=self.http_status, content=self.to_dict())


class ValidationException(AppException):
    """参数验证异常"""

    def __init__(self, message: str = "Invalid input."):
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class NotFoundException(AppException):
    """资源不存在异常"""

    body_key = "message"

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"{resource} not found"
        )


class ExternalServiceException(AppException):
    """第三方服务异常"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(code=ErrorCode.EXTERNAL_API_ERROR, message=message)


# ==================== 异常处理器 ====================

def format_validation_errors(errors: list) -> str:
    """把 pydantic 错误列表压缩为一行可读文本"""
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts) or ERROR_MESSAGES[ErrorCode.VALIDATION_ERROR]


def register_exception_handlers(app):
    """
    注册异常处理器

    在 main.py 中调用：
        from core.errors import register_exception_handlers
        register_exception_handlers(app)
    """
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException as StarletteHTTPException

    @app.exception_handler(AppException)
    async def handle_app_exception(request, exc: AppException):
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} 失败: {exc.message}")
        return exc.to_response()

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": format_validation_errors(exc.errors())}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail) if exc.detail else ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR]},
            headers=getattr(exc, "headers", None)
        )
