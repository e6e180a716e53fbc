"""
依赖注入
提供全局可复用的依赖项
"""

from fastapi import Request

from .database import get_db
from .config import get_settings
from .errors import AppException, ErrorCode

__all__ = [
    "get_db",
    "get_settings",
    "get_identity_bridge",
]


def get_identity_bridge(request: Request):
    """获取启动时创建的身份提供方客户端"""
    bridge = getattr(request.app.state, "identity_bridge", None)
    if bridge is None:
        raise AppException(ErrorCode.INTERNAL_ERROR, "Identity bridge is not initialised")
    return bridge
