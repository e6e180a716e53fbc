"""
健康检查路由
提供系统健康状态端点
"""

import time
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["健康检查"])


class ComponentHealth(BaseModel):
    """组件健康状态"""
    status: str
    message: Optional[str] = None
    latency_ms: Optional[float] = None


class HealthStatus(BaseModel):
    """健康状态响应"""
    status: str  # healthy, unhealthy
    version: str
    timestamp: str
    components: dict


async def check_database(db: AsyncSession) -> ComponentHealth:
    """检查数据库连接"""
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"数据库健康检查失败: {e}")
        return ComponentHealth(status="unhealthy", message=str(e))

    latency = (time.time() - start) * 1000
    return ComponentHealth(status="healthy", message="ok", latency_ms=round(latency, 2))


@router.get("/health", summary="健康检查")
async def health_check(db: AsyncSession = Depends(get_db)):
    database = await check_database(db)
    overall = "healthy" if database.status == "healthy" else "unhealthy"
    body = HealthStatus(
        status=overall,
        version=get_settings().app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
        components={"database": database.model_dump()}
    )
    return JSONResponse(status_code=200 if overall == "healthy" else 503, content=body.model_dump())
