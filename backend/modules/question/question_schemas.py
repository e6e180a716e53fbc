"""
题目模块数据验证
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuestionCreate(BaseModel):
    """
    创建题目

    answer 的结构由服务层校验，以返回固定的错误信息
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="题目标题")
    content: str = Field(..., description="题干")
    answer: Any = Field(None, description="4 个选项，每项包含 name 与 content")
    correct_answer: Optional[str] = Field(None, alias="correctAnswer", description="正确答案")


class QuestionResponse(BaseModel):
    """题目响应"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    content: str
    answer: Any
    correct_answer: Optional[str] = Field(None, serialization_alias="correctAnswer")
