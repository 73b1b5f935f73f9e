# Import all models so they register with SQLAlchemy Base.metadata

from eventually.models.category import Category
from eventually.models.task import Task, Priority

__all__ = [
    "Category",
    "Task",
    "Priority",
]
