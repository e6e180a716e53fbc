"""
工具函数目录
按功能分类组织
"""

from .export import DataExporter, ExportColumn
from .storage import StorageManager, get_storage_manager

__all__ = [
    # 导出
    "DataExporter",
    "ExportColumn",
    # 文件存储
    "StorageManager",
    "get_storage_manager",
]
