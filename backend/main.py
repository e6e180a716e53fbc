"""
Exam Records Service - 主入口
基于 FastAPI 的考试与题目记录服务

功能：
- 考试分页/筛选查询、Excel/CSV 导出、创建与删除
- 选择题创建（4 选项结构校验）
- 图片上传与静态访问
- 遵守声明书 PDF 生成
- 身份提供方演示用户注册
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from core.config import get_settings
from core.database import init_db, close_db
from core.middleware import RequestLoggingMiddleware
from core.errors import register_exception_handlers
from utils.identity import IdentityBridge
from utils.storage import get_storage_manager

settings = get_settings()

# 配置日志
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# 减少第三方库的日志输出
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # ==================== 启动阶段 ====================
    logger.info(f"🚀 正在启动 {settings.app_name} v{settings.app_version}...")

    await init_db()
    logger.info("✅ 数据库表已就绪")

    # 外部客户端在启动时创建一次，经依赖注入传给各请求
    app.state.identity_bridge = IdentityBridge(settings=settings)

    logger.info(f"🎉 {settings.app_name} 启动完成! 访问: http://localhost:{settings.port}/api-docs")

    yield

    # ==================== 关闭阶段 ====================
    logger.info("🛑 系统关闭中...")
    await app.state.identity_bridge.aclose()
    await close_db()
    logger.info("👋 系统已关闭")


# ==================== 创建应用 ====================
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="考试与选择题记录服务，附带导出、上传与 PDF 生成",
    lifespan=lifespan,
    docs_url="/api-docs",
    redoc_url=None,
    openapi_url="/openapi.json"
)


# ==================== 中间件配置（顺序重要，后添加的先执行） ====================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.add_middleware(
    RequestLoggingMiddleware,
    slow_request_threshold=1.0  # 超过1秒的请求记录为慢请求
)


# ==================== 异常处理器 ====================
register_exception_handlers(app)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常捕获，统一返回 500"""
    logger.error(f"未处理异常: {request.method} {request.url.path} - {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Internal Server Error"}
    )


# ==================== 注册路由 ====================
from routers import storage, admin, health
from modules.exam.exam_router import router as exam_router
from modules.question.question_router import router as question_router
from modules.pdf.pdf_router import router as pdf_router

app.include_router(exam_router, tags=["考试"])
app.include_router(question_router, tags=["题目"])
app.include_router(pdf_router, tags=["PDF"])
app.include_router(storage.router)
app.include_router(admin.router)
app.include_router(health.router)


# ==================== 静态文件配置 ====================
upload_path = Path(get_storage_manager().upload_dir)
app.mount("/uploads", StaticFiles(directory=str(upload_path)), name="uploads")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
