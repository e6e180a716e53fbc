"""
考试模块业务逻辑
实现考试的筛选、分页、导出、创建与删除
"""

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Optional, List, Tuple

from sqlalchemy import select, or_, true
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundException
from core.pagination import PaginationParams, PageResult, paginate_query
from utils.export import DataExporter, ExportColumn

from .exam_models import Exam
from .exam_schemas import ExamCreate, ExamResponse

logger = logging.getLogger(__name__)

# 不可能存在的ID，用于表示“无匹配”
NO_MATCH_ID = -1

EXCEL_SHEET_NAME = "Exams"
EXCEL_COLUMNS = [
    ExportColumn("ID", "id", 10),
    ExportColumn("Name", "name", 20),
    ExportColumn("Description", "description", 30),
    ExportColumn("Venue", "venue", 20),
]
CSV_FIELDS = ["id", "name", "description", "venue", "time", "duration"]


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class ExamFilter:
    """
    考试筛选谓词

    - match_all: 不限制
    - ids 非空: id IN ids
    - ids 为空且非 match_all: 无匹配（id == -1）
    """
    match_all: bool = True
    ids: List[int] = field(default_factory=list)

    @property
    def matches_nothing(self) -> bool:
        return not self.match_all and not self.ids

    def to_condition(self):
        if self.match_all:
            return true()
        if self.matches_nothing:
            return Exam.id == NO_MATCH_ID
        return Exam.id.in_(self.ids)

    def to_select(self):
        """按 id 升序的考试查询"""
        return select(Exam).where(self.to_condition()).order_by(Exam.id.asc())


class ExamService:
    """
    考试服务类
    所有读操作都在调用方的会话事务内完成
    """

    # ==================== 筛选 ====================

    @staticmethod
    def keyword_condition(keyword: str):
        """名称、描述、考场任一字段不区分大小写包含关键词"""
        pattern = f"%{_escape_like(keyword)}%"
        return or_(
            Exam.name.ilike(pattern, escape="\\"),
            Exam.description.ilike(pattern, escape="\\"),
            Exam.venue.ilike(pattern, escape="\\"),
        )

    @staticmethod
    async def resolve_filter(db: AsyncSession, keyword: Optional[str]) -> ExamFilter:
        """把自由文本筛选解析为考试ID集合谓词"""
        if not keyword:
            return ExamFilter()

        result = await db.execute(
            select(Exam.id).where(ExamService.keyword_condition(keyword)).order_by(Exam.id)
        )
        ids = list(result.scalars().all())
        logger.debug(f"筛选 '{keyword}' 匹配 {len(ids)} 条考试")
        return ExamFilter(match_all=False, ids=ids)

    # ==================== 查询 ====================

    @staticmethod
    async def list_exams(
        db: AsyncSession,
        pagination: PaginationParams,
        keyword: Optional[str] = None
    ) -> PageResult:
        """分页获取考试列表"""
        exam_filter = await ExamService.resolve_filter(db, keyword)
        items, total = await paginate_query(
            db,
            exam_filter.to_select(),
            pagination,
            transformer=lambda exam: ExamResponse.model_validate(exam).model_dump(mode="json")
        )
        return PageResult.create(items, total, pagination.page, pagination.page_size)

    @staticmethod
    async def list_all_exams(db: AsyncSession, keyword: Optional[str] = None) -> List[Exam]:
        """获取全部匹配的考试（导出用，不分页）"""
        exam_filter = await ExamService.resolve_filter(db, keyword)
        result = await db.execute(exam_filter.to_select())
        return list(result.scalars().all())

    @staticmethod
    async def get_exam_by_id(db: AsyncSession, exam_id: int) -> Optional[Exam]:
        """获取考试"""
        return await db.get(Exam, exam_id)

    # ==================== 写操作 ====================

    @staticmethod
    async def create_exam(db: AsyncSession, data: ExamCreate) -> Exam:
        """创建考试"""
        exam = Exam(**data.model_dump())
        db.add(exam)
        await db.flush()
        await db.refresh(exam)
        logger.info(f"创建考试: id={exam.id}, name={exam.name}")
        return exam

    @staticmethod
    async def delete_exam(db: AsyncSession, exam_id: int) -> None:
        """删除考试，不存在时抛出 NotFoundException"""
        exam = await ExamService.get_exam_by_id(db, exam_id)
        if not exam:
            raise NotFoundException("Exam")
        await db.delete(exam)
        await db.flush()
        logger.info(f"删除考试: id={exam_id}")

    # ==================== 导出 ====================

    @staticmethod
    def _to_rows(exams: List[Exam]) -> List[dict]:
        return [ExamResponse.model_validate(exam).model_dump() for exam in exams]

    @staticmethod
    async def export_excel(db: AsyncSession, keyword: Optional[str] = None) -> Tuple[BytesIO, int]:
        """导出匹配的考试为 Excel"""
        exams = await ExamService.list_all_exams(db, keyword)
        stream = DataExporter.export_to_excel(
            ExamService._to_rows(exams), EXCEL_COLUMNS, sheet_name=EXCEL_SHEET_NAME
        )
        logger.info(f"导出考试 Excel: filter={keyword!r}, rows={len(exams)}")
        return stream, len(exams)

    @staticmethod
    async def export_csv(db: AsyncSession, keyword: Optional[str] = None) -> Tuple[BytesIO, int]:
        """导出匹配的考试为 CSV"""
        exams = await ExamService.list_all_exams(db, keyword)
        stream = DataExporter.export_to_csv(ExamService._to_rows(exams), CSV_FIELDS)
        logger.info(f"导出考试 CSV: filter={keyword!r}, rows={len(exams)}")
        return stream, len(exams)
