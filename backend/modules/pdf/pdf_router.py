"""
PDF 模块路由
"""

from fastapi import APIRouter
from fastapi.responses import Response

from .pdf_services import PdfService, PDF_FILENAME

router = APIRouter()


@router.get("/generatepdf", summary="生成遵守声明书 PDF")
async def generate_pdf():
    """返回固定内容的遵守声明书"""
    content = PdfService.build_declaration_pdf()
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={PDF_FILENAME}"}
    )
