"""
文件上传路由
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, UploadFile, File

from core.errors import AppException, ErrorCode
from utils.storage import StorageManager, get_storage_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["文件上传"])


@router.post("/upload-image", summary="上传单张图片")
async def upload_image(
    image: Optional[UploadFile] = File(None, description="表单字段名固定为 image"),
    storage: StorageManager = Depends(get_storage_manager)
):
    """
    上传文件并返回访问地址

    不校验类型和大小，缺少文件时返回 400
    """
    if image is None or not image.filename:
        raise AppException(ErrorCode.UPLOAD_FAILED)

    content = await image.read()
    filename = storage.save(image.filename, content)
    return {"url": storage.build_url(filename)}
