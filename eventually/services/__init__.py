from eventually.services.category_service import CategoryService
from eventually.services.task_service import TaskService
from eventually.services.task_tree import build_task_tree

__all__ = ["CategoryService", "TaskService", "build_task_tree"]
