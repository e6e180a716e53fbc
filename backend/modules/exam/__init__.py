"""
考试模块
"""

from .exam_models import Exam
from .exam_services import ExamService, ExamFilter

__all__ = ["Exam", "ExamService", "ExamFilter"]
