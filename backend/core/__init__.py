"""
核心模块
提供服务的基础设施和通用功能

导出列表：
- 配置管理: get_settings, Settings
- 数据库: Base, get_db, async_session
- 分页工具: paginate_query, PageResult, PaginationParams, Paginator
- 错误处理: ErrorCode, AppException, ValidationException, NotFoundException
"""

# 配置管理
from .config import get_settings, Settings, reload_settings

# 数据库
from .database import Base, get_db, async_session, init_db, close_db

# 分页工具
from .pagination import (
    paginate_query,
    PageResult,
    PaginationParams,
    Paginator,
    default_paginator
)

# 错误处理
from .errors import (
    ErrorCode,
    AppException,
    ValidationException,
    NotFoundException,
    ExternalServiceException,
    register_exception_handlers
)

__all__ = [
    "get_settings", "Settings", "reload_settings",
    "Base", "get_db", "async_session", "init_db", "close_db",
    "paginate_query", "PageResult", "PaginationParams", "Paginator", "default_paginator",
    "ErrorCode", "AppException", "ValidationException", "NotFoundException",
    "ExternalServiceException", "register_exception_handlers",
]
