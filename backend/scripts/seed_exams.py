# -*- coding: utf-8 -*-
"""
批量生成考试示例数据

运行: python scripts/seed_exams.py --count 50
"""

import argparse
import asyncio
import os
import random
import sys
from datetime import datetime

# 确保可以导入项目模块
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.database import async_session, init_db, close_db
from modules.exam.exam_models import Exam


def random_exam() -> dict:
    """生成一条随机考试数据"""
    return {
        "name": f"Exam-{random.randint(0, 9999)}",
        "description": f"Description for Exam-{random.randint(0, 9999)}",
        "venue": f"Venue-{random.randint(0, 99)}",
        "time": datetime.now(),
        "duration": random.randint(1, 4),
    }


async def seed(count: int) -> int:
    """写入 count 条考试，返回写入数量"""
    await init_db()
    async with async_session() as session:
        session.add_all([Exam(**random_exam()) for _ in range(count)])
        await session.commit()
    return count


async def main(count: int):
    try:
        inserted = await seed(count)
        print(f"已写入 {inserted} 条考试数据")
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="批量生成考试示例数据")
    parser.add_argument("--count", type=int, default=50, help="生成数量（默认 50）")
    args = parser.parse_args()
    asyncio.run(main(args.count))
