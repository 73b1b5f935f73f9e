from enum import Enum

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, CheckConstraint, Index
from eventually.database import Base


class Priority(str, Enum):
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


PRIORITY_VALUES = tuple(p.value for p in Priority)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    priority = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True)
    is_done = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False)  # dense 0..k-1 within (parent_id, category_id)
    due_date = Column(Integer, nullable=True)
    created_at = Column(Integer, nullable=False)
    updated_at = Column(Integer, nullable=False)
    completed_at = Column(Integer, nullable=True)  # set iff is_done

    __table_args__ = (
        CheckConstraint(
            "priority IN (" + ", ".join(f"'{p}'" for p in PRIORITY_VALUES) + ")",
            name="ck_tasks_priority",
        ),
        Index("idx_tasks_category", "category_id"),
        Index("idx_tasks_parent", "parent_id"),
        Index("idx_tasks_priority", "priority"),
        Index("idx_tasks_done", "is_done"),
        Index("idx_tasks_position", "position"),
    )
