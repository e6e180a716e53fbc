"""
题目模块业务逻辑
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ValidationException

from .question_models import Question
from .question_schemas import QuestionCreate

logger = logging.getLogger(__name__)

ANSWER_OPTION_COUNT = 4


def validate_answer_options(answer: Any) -> None:
    """校验选项结构：恰好 4 项，每项 name 与 content 均非空"""
    if not isinstance(answer, list) or len(answer) != ANSWER_OPTION_COUNT:
        raise ValidationException("Answer array is not in the expected format.")

    for option in answer:
        if not isinstance(option, dict) or not option.get("name") or not option.get("content"):
            raise ValidationException("Answer options are not in the expected format.")


class QuestionService:
    """题目服务类"""

    @staticmethod
    async def create_question(db: AsyncSession, data: QuestionCreate) -> Question:
        """校验后创建题目，校验失败时不写入"""
        validate_answer_options(data.answer)

        question = Question(
            title=data.title,
            content=data.content,
            answer=data.answer,
            correct_answer=data.correct_answer,
        )
        db.add(question)
        await db.flush()
        await db.refresh(question)
        logger.info(f"创建题目: id={question.id}")
        return question
