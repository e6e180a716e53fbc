"""
考试模块路由
定义 API 接口
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.pagination import default_paginator

from .exam_schemas import ExamCreate, ExamResponse, ExamListResponse, MessageResponse
from .exam_services import ExamService

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# 超出数据库整数范围的页码/数量按参数错误处理
MAX_QUERY_INT = 2 ** 31 - 1


@router.get("/exams", summary="分页获取考试列表", response_model=ExamListResponse)
async def get_exam_list(
    page: Optional[int] = Query(None, le=MAX_QUERY_INT, description="页码，默认 1；小于 1 时按 1 处理"),
    limit: Optional[int] = Query(None, le=MAX_QUERY_INT, description="每页数量，默认 10；小于 1 时按 10 处理"),
    filter: Optional[str] = Query(None, description="在名称、描述、考场中不区分大小写搜索"),
    db: AsyncSession = Depends(get_db)
):
    """获取考试列表"""
    pagination = default_paginator.normalize(page, limit)
    result = await ExamService.list_exams(db, pagination, filter)
    return result.to_dict()


@router.get("/export/exams", summary="导出考试为 Excel")
async def export_exams_excel(
    filter: Optional[str] = Query(None, description="可选筛选关键词"),
    db: AsyncSession = Depends(get_db)
):
    """导出全部匹配的考试为 Excel 附件"""
    stream, _ = await ExamService.export_excel(db, filter)
    return StreamingResponse(
        stream,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=exams.xlsx"}
    )


@router.get("/export/exams/csv", summary="导出考试为 CSV")
async def export_exams_csv(
    filter: Optional[str] = Query(None, description="可选筛选关键词"),
    db: AsyncSession = Depends(get_db)
):
    """导出全部匹配的考试为 CSV 附件"""
    stream, _ = await ExamService.export_csv(db, filter)
    return StreamingResponse(
        stream,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=exams.csv"}
    )


@router.post("/exams", summary="创建考试", response_model=ExamResponse)
async def create_exam(
    data: ExamCreate,
    db: AsyncSession = Depends(get_db)
):
    """创建考试"""
    exam = await ExamService.create_exam(db, data)
    await db.commit()
    return ExamResponse.model_validate(exam)


@router.delete(
    "/exam/{exam_id}",
    summary="删除考试",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}}
)
async def delete_exam(
    exam_id: int,
    db: AsyncSession = Depends(get_db)
):
    """按ID删除考试"""
    await ExamService.delete_exam(db, exam_id)
    await db.commit()
    return {"message": "Exam deleted successfully"}
