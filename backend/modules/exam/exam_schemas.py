"""
考试模块数据验证
定义请求和响应的数据结构
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExamCreate(BaseModel):
    """创建考试"""
    name: str = Field(..., description="考试名称")
    description: str = Field(..., description="考试描述")
    venue: str = Field(..., description="考场")
    time: datetime = Field(..., description="考试时间")
    duration: int = Field(..., description="时长(分钟)")

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        """带时区的时间统一换算为 UTC 后以无时区形式存储"""
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class ExamResponse(BaseModel):
    """考试响应"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    venue: str
    time: datetime
    duration: int


class ExamListMeta(BaseModel):
    totalRecords: int
    totalPages: int
    currentPage: int


class ExamListResponse(BaseModel):
    """考试分页列表"""
    items: List[ExamResponse]
    meta: ExamListMeta


class MessageResponse(BaseModel):
    message: str
