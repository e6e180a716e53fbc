"""
路由目录
"""

from . import storage, admin, health

__all__ = ["storage", "admin", "health"]
