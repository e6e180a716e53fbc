"""
测试配置和 Fixtures
提供测试用的数据库会话、客户端和通用工具
"""

import os
import sys
from datetime import datetime
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# 确保可以导入项目模块
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.database import Base, get_db
from main import app
from modules.exam.exam_models import Exam
from utils.storage import StorageManager, get_storage_manager


# ==================== 配置 ====================

# 使用 SQLite 内存数据库进行测试
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ==================== Fixtures ====================

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    创建测试用数据库会话
    每个测试函数使用独立的内存库，并自动注入到 FastAPI 中
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )

    async with session_factory() as session:
        async def _get_test_db():
            yield session

        app.dependency_overrides[get_db] = _get_test_db

        yield session
        await session.rollback()

        app.dependency_overrides.pop(get_db, None)

    await engine.dispose()


@pytest.fixture
def storage(tmp_path) -> StorageManager:
    """隔离的上传目录"""
    manager = StorageManager(upload_dir=str(tmp_path / "uploads"), public_base_url="http://testserver")
    app.dependency_overrides[get_storage_manager] = lambda: manager
    yield manager
    app.dependency_overrides.pop(get_storage_manager, None)


@pytest_asyncio.fixture(scope="function")
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """创建异步测试客户端"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def lenient_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """未捕获异常转换为 500 响应而不是抛到测试中"""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def exam_payload() -> dict:
    """考试创建请求体"""
    return {
        "name": "Mathematics Final",
        "description": "Paper 1, calculators allowed",
        "venue": "Hall A",
        "time": "2024-06-01T09:00:00",
        "duration": 120
    }


@pytest.fixture
def answer_options() -> List[dict]:
    """4 个合法选项"""
    return [
        {"name": "A", "content": "Kuala Lumpur"},
        {"name": "B", "content": "Putrajaya"},
        {"name": "C", "content": "Johor Bahru"},
        {"name": "D", "content": "George Town"},
    ]


# ==================== 工具函数 ====================

async def create_exams(session: AsyncSession, count: int, venue_of=None) -> List[Exam]:
    """
    批量创建考试，名称为 Exam-1..Exam-N
    venue_of: 可选函数，根据序号返回考场
    """
    exams = []
    for i in range(1, count + 1):
        exam = Exam(
            name=f"Exam-{i}",
            description=f"Description for Exam-{i}",
            venue=venue_of(i) if venue_of else f"Venue-{i}",
            time=datetime(2024, 1, 1, 9, 0, 0),
            duration=(i % 4) + 1
        )
        session.add(exam)
        exams.append(exam)
    await session.commit()
    for exam in exams:
        await session.refresh(exam)
    return exams
