"""
task_service.py — Task management
Handles CRUD for Tasks plus the position bookkeeping that keeps every
(parent_id, category_id) group densely numbered 0..k-1.

Every public method runs on a single Session, i.e. one borrowed pooled
connection and one transaction. Multi-statement moves commit once at the end.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy import asc, func

from eventually.database import now_ts
from eventually.errors import NotFound
from eventually.models.task import Task

logger = logging.getLogger(__name__)

# Columns a caller may patch directly; is_done and position have side effects.
_PLAIN_FIELDS = ("title", "description", "category_id", "priority", "parent_id", "due_date")


def _matches(column, value):
    # NULL is its own group, never a wildcard.
    return column.is_(None) if value is None else column == value


def _group(parent_id, category_id):
    return (_matches(Task.parent_id, parent_id), _matches(Task.category_id, category_id))


def _shift(db: Session, parent_id, category_id, delta: int, *conditions) -> int:
    """Add delta to the position of every group member matching conditions."""
    return (
        db.query(Task)
        .filter(*_group(parent_id, category_id), *conditions)
        .update({Task.position: Task.position + delta}, synchronize_session=False)
    )


class TaskService:
    @staticmethod
    def next_position(db: Session, parent_id: int | None, category_id: int | None) -> int:
        """max(position) + 1 within the group, or 0 for an empty group."""
        value = (
            db.query(func.coalesce(func.max(Task.position), -1) + 1)
            .filter(*_group(parent_id, category_id))
            .scalar()
        )
        return int(value or 0)

    @staticmethod
    def create(db: Session, data: dict) -> Task:
        """Insert a task at the end of its group. Title is stored as given."""
        try:
            now = now_ts()
            position = TaskService.next_position(db, data.get("parent_id"), data.get("category_id"))
            task = Task(
                title=data["title"],
                description=data.get("description"),
                category_id=data.get("category_id"),
                priority=data["priority"],
                parent_id=data.get("parent_id"),
                is_done=False,
                position=position,
                due_date=data.get("due_date"),
                created_at=now,
                updated_at=now,
            )
            db.add(task)
            db.commit()
            db.refresh(task)
        except Exception:
            db.rollback()
            raise
        logger.debug(
            "Task created id=%s parent=%s category=%s position=%s",
            task.id, task.parent_id, task.category_id, task.position,
        )
        return task

    @staticmethod
    def get_all(db: Session) -> list[Task]:
        """Every task in global position order (ties by id)."""
        return db.query(Task).order_by(asc(Task.position), asc(Task.id)).all()

    @staticmethod
    def get_by_id(db: Session, task_id: int) -> Task:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        return task

    @staticmethod
    def update(db: Session, task_id: int, data: dict) -> Task:
        """Patch the supplied fields.

        is_done stamps or clears completed_at. A change of parent or category
        closes the gap in the old group and appends to the new one, unless a
        position is supplied, in which case the task is inserted there.
        A supplied position within the same group behaves like reorder().
        """
        try:
            task = TaskService.get_by_id(db, task_id)
            old_parent, old_category, old_position = task.parent_id, task.category_id, task.position
            now = now_ts()

            for key in _PLAIN_FIELDS:
                if key in data:
                    setattr(task, key, data[key])

            if "is_done" in data:
                task.is_done = bool(data["is_done"])
                task.completed_at = now if task.is_done else None

            task.updated_at = now

            if (task.parent_id, task.category_id) != (old_parent, old_category):
                _shift(db, old_parent, old_category, -1, Task.position > old_position)
                size = TaskService.next_position(db, task.parent_id, task.category_id)
                target = max(0, min(data.get("position", size), size))
                if target < size:
                    _shift(db, task.parent_id, task.category_id, 1, Task.position >= target)
                task.position = target
                logger.debug(
                    "Task %s moved group (%s, %s) -> (%s, %s) at %s",
                    task_id, old_parent, old_category, task.parent_id, task.category_id, target,
                )
            elif "position" in data:
                task.position = TaskService._move_within_group(db, task, data["position"])

            db.commit()
            db.refresh(task)
            return task
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete(db: Session, task_id: int) -> bool:
        """Delete a task; the store cascades to its descendants.

        Later siblings shift down to keep the group dense. Returns False when
        the id does not exist.
        """
        try:
            task = db.get(Task, task_id)
            if task is None:
                db.rollback()
                return False
            parent_id, category_id, position = task.parent_id, task.category_id, task.position

            db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
            _shift(db, parent_id, category_id, -1, Task.position > position)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.debug("Task deleted id=%s", task_id)
        return True

    @staticmethod
    def reorder(db: Session, task_id: int, new_position: int) -> int:
        """Move a task within its group, shifting the siblings in between.

        Positions past the end are clamped to the last slot. Returns the
        position the task ended up at.
        """
        try:
            task = TaskService.get_by_id(db, task_id)
            old_position = task.position
            target = TaskService._move_within_group(db, task, new_position)
            if target == old_position:
                db.rollback()
                return target
            task.position = target
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.debug("Task %s reordered %s -> %s", task_id, old_position, target)
        return target

    @staticmethod
    def rehome_category_tasks(db: Session, category_id: int):
        """Append a category's tasks to their uncategorised groups.

        Called inside the category-delete transaction before the row goes,
        so the store's SET NULL does not collide with existing positions.
        Does not commit.
        """
        members = (
            db.query(Task)
            .filter(Task.category_id == category_id)
            .order_by(asc(Task.position), asc(Task.id))
            .all()
        )
        by_parent: dict[int | None, list[Task]] = {}
        for task in members:
            by_parent.setdefault(task.parent_id, []).append(task)

        for parent_id, tasks in by_parent.items():
            offset = TaskService.next_position(db, parent_id, None)
            for i, task in enumerate(tasks):
                task.position = offset + i
        db.flush()

    # ------------------------------------------------------------------
    @staticmethod
    def _move_within_group(db: Session, task: Task, new_position: int) -> int:
        """Shift the siblings between the old and new slot; returns the new slot.

        The caller writes the moved task's own position and commits.
        """
        last = TaskService.next_position(db, task.parent_id, task.category_id) - 1
        target = max(0, min(new_position, last))
        old = task.position

        if old < target:
            _shift(db, task.parent_id, task.category_id, -1,
                   Task.position > old, Task.position <= target)
        elif old > target:
            _shift(db, task.parent_id, task.category_id, 1,
                   Task.position >= target, Task.position < old)
        return target
