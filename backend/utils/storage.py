"""
文件存储工具
处理图片上传的落盘与访问地址生成
"""

import time
from pathlib import Path
from typing import Optional, Tuple
import logging

from core.config import get_settings

logger = logging.getLogger(__name__)


class StorageManager:
    """文件存储管理器"""

    def __init__(self, upload_dir: Optional[str] = None, public_base_url: Optional[str] = None):
        settings = get_settings()
        # 使用绝对路径，避免工作目录差异导致多处生成上传目录
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")

        # 确保上传目录存在
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def generate_filename(self, original_filename: str) -> Tuple[str, str]:
        """
        生成防冲突文件名：原始文件名主干 + 纳秒时间戳 + 原始扩展名

        Args:
            original_filename: 客户端提供的文件名（只取最后一段）

        Returns:
            (文件名, 完整路径)
        """
        base = Path(original_filename.replace("\\", "/")).name
        path = Path(base)
        ext = path.suffix
        stem = path.stem if ext else base

        filename = f"{stem}-{time.time_ns()}{ext}"
        full_path = self.upload_dir / filename
        return filename, str(full_path)

    def _is_safe_path(self, path: Path) -> bool:
        """检查路径是否位于上传目录内（防止路径遍历）"""
        try:
            return path.resolve().parent == self.upload_dir
        except Exception:
            return False

    def save(self, original_filename: str, content: bytes) -> str:
        """
        保存文件内容，返回生成的文件名

        写入在返回前完成；失败时不清理残留文件
        """
        filename, full_path = self.generate_filename(original_filename)
        target = Path(full_path)
        if not self._is_safe_path(target):
            raise ValueError(f"非法文件名: {original_filename}")

        target.write_bytes(content)
        logger.info(f"保存上传文件: {filename} ({len(content)} 字节)")
        return filename

    def build_url(self, filename: str) -> str:
        """构造文件访问地址"""
        return f"{self.public_base_url}/uploads/{filename}"


# 全局存储管理器实例
_storage_manager: Optional[StorageManager] = None


def get_storage_manager() -> StorageManager:
    """获取存储管理器实例"""
    global _storage_manager
    if _storage_manager is None:
        _storage_manager = StorageManager()
    return _storage_manager
