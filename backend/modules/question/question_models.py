"""
题目模块数据模型
"""

from sqlalchemy import Column, Integer, Text, JSON

from core.database import Base


class Question(Base):
    """
    选择题表
    answer 按提交原样保存 4 个选项，correctAnswer 不与选项交叉校验
    """
    __tablename__ = "Question"
    __table_args__ = {'extend_existing': True, 'comment': '选择题表'}

    id = Column(Integer, primary_key=True, autoincrement=True, comment="主键ID")
    title = Column(Text, nullable=False, comment="题目标题")
    content = Column(Text, nullable=False, comment="题干")
    answer = Column(JSON, nullable=False, comment="选项列表(JSON)")  # [{"name": "A", "content": "..."}, ...]
    correct_answer = Column("correctAnswer", Text, nullable=True, comment="正确答案")

    def __repr__(self):
        return f"<Question(id={self.id}, title={self.title})>"
