"""
题目模块
"""

from .question_models import Question
from .question_services import QuestionService

__all__ = ["Question", "QuestionService"]
