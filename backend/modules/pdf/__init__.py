"""
PDF 模块
"""

from .pdf_services import PdfService

__all__ = ["PdfService"]
