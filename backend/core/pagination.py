"""
分页工具
列表接口统一使用 page/limit 查询参数，响应为 {"items": [...], "meta": {...}}
"""

import math
from typing import Any, Callable, List, Optional, Tuple

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


class PaginationParams(BaseModel):
    """规范化之后的分页参数"""
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class PageResult(BaseModel):
    """一页数据及其统计信息"""
    items: List[Any]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def create(cls, items: List[Any], total: int, page: int, page_size: int) -> "PageResult":
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size) if page_size else 0
        )

    def to_dict(self) -> dict:
        """列表接口响应体"""
        return {
            "items": self.items,
            "meta": {
                "totalRecords": self.total,
                "totalPages": self.total_pages,
                "currentPage": self.page,
            },
        }


class Paginator:
    """
    查询参数规范化

    缺失或小于 1 的页码按第 1 页处理，缺失或小于 1 的每页数量按默认值处理。
    max_page_size 为 None 时不限制每页数量。
    """

    def __init__(self, default_page_size: int = DEFAULT_PAGE_SIZE, max_page_size: Optional[int] = None):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def normalize(self, page: Optional[int], page_size: Optional[int]) -> PaginationParams:
        page = page if page is not None and page >= 1 else DEFAULT_PAGE
        if page_size is None or page_size < 1:
            page_size = self.default_page_size
        if self.max_page_size is not None:
            page_size = min(page_size, self.max_page_size)
        return PaginationParams(page=page, page_size=page_size)


default_paginator = Paginator()


async def paginate_query(
    db: AsyncSession,
    stmt: Select,
    params: PaginationParams,
    transformer: Optional[Callable[[Any], Any]] = None
) -> Tuple[List[Any], int]:
    """
    对任意 select 语句分页

    总数基于去掉排序的同一语句统计，两次查询在调用方的会话事务内执行。

    Returns:
        (当前页数据, 总记录数)
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    rows = (await db.execute(stmt.offset(params.offset).limit(params.limit))).scalars().all()
    items = [transformer(row) for row in rows] if transformer else list(rows)
    return items, total
