"""
考试模块数据模型
定义数据库表结构
"""

from sqlalchemy import Column, Integer, Text, DateTime

from core.database import Base


class Exam(Base):
    """
    考试表
    创建后只读，不支持原地更新
    """
    __tablename__ = "Exam"
    __table_args__ = {'extend_existing': True, 'comment': '考试表'}

    id = Column(Integer, primary_key=True, autoincrement=True, comment="主键ID")
    name = Column(Text, nullable=False, comment="考试名称")
    description = Column(Text, nullable=False, comment="考试描述")
    venue = Column(Text, nullable=False, comment="考场")
    time = Column(DateTime, nullable=False, comment="考试时间")
    duration = Column(Integer, nullable=False, comment="时长(分钟)")

    def __repr__(self):
        return f"<Exam(id={self.id}, name={self.name})>"
