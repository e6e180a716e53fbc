"""
题目模块路由
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db

from .question_schemas import QuestionCreate, QuestionResponse
from .question_services import QuestionService

router = APIRouter()


@router.post(
    "/question",
    summary="创建选择题",
    status_code=status.HTTP_201_CREATED,
    response_model=QuestionResponse
)
async def create_question(
    data: QuestionCreate,
    db: AsyncSession = Depends(get_db)
):
    """创建题目，answer 必须是 4 个包含 name 与 content 的选项"""
    question = await QuestionService.create_question(db, data)
    await db.commit()
    return QuestionResponse.model_validate(question)
