"""
commands.py — Command surface used by the UI shell
Each command borrows one Session, applies the domain rules, delegates to the
services and returns plain response models. Failures leave here as exactly
one AppError subclass; nothing is retried.
"""

import functools
import logging
from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session

from eventually.errors import AppError, DatabaseError, InvalidInput, NotFound, ValidationError
from eventually.schemas import (
    CategoryCreate, CategoryOut, CategoryUpdate,
    ReorderInput, TaskCreate, TaskOut, TaskTree, TaskUpdate,
)
from eventually.services.category_service import CategoryService
from eventually.services.task_service import TaskService
from eventually.services.task_tree import build_task_tree
from eventually.validation import (
    sanitize_description, validate_category_name, validate_color_hex, validate_task_title,
)

logger = logging.getLogger(__name__)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "input"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def command(func):
    """Translate anything raised by func into the outward error taxonomy."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AppError as e:
            logger.warning("%s failed: %s: %s", func.__name__, e.kind, e.message)
            raise
        except PydanticValidationError as e:
            logger.warning("%s rejected input: %s", func.__name__, e)
            raise InvalidInput(_describe(e)) from e
        except NoResultFound as e:
            raise NotFound("Record not found") from e
        except SQLAlchemyError as e:
            logger.exception("%s hit a storage error", func.__name__)
            raise DatabaseError(str(getattr(e, "orig", None) or e)) from e

    return wrapper


def _coerce(model, raw):
    if isinstance(raw, model):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"Expected an object for {model.__name__}, got {type(raw).__name__}")
    return model.model_validate(dict(raw))


def _as_id(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"Invalid id: {value!r}")
    return value


# --- Categories ---

@command
def create_category(db: Session, name: str, color: str) -> CategoryOut:
    data = _coerce(CategoryCreate, {"name": name, "color": color})
    category = CategoryService.create(
        db, validate_category_name(data.name), validate_color_hex(data.color)
    )
    return CategoryOut.model_validate(category)


@command
def get_all_categories(db: Session) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in CategoryService.get_all(db)]


@command
def update_category(db: Session, category_id: int, payload) -> CategoryOut:
    category_id = _as_id(category_id)
    patch = _coerce(CategoryUpdate, payload).model_dump(exclude_unset=True)
    if "name" in patch:
        patch["name"] = validate_category_name(patch["name"])
    if "color" in patch:
        validate_color_hex(patch["color"])
    return CategoryOut.model_validate(CategoryService.update(db, category_id, patch))


@command
def delete_category(db: Session, category_id: int) -> None:
    # Unknown ids are a silent no-op.
    CategoryService.delete(db, _as_id(category_id))


# --- Tasks ---

@command
def create_task(db: Session, payload) -> TaskOut:
    data = _coerce(TaskCreate, payload).model_dump()
    data["title"] = validate_task_title(data["title"])
    data["description"] = sanitize_description(data["description"])
    data["priority"] = data["priority"].value
    return TaskOut.model_validate(TaskService.create(db, data))


@command
def get_all_tasks(db: Session) -> list[TaskOut]:
    return [TaskOut.model_validate(t) for t in TaskService.get_all(db)]


@command
def get_task_tree(db: Session) -> list[TaskTree]:
    return build_task_tree(get_all_tasks(db))


@command
def update_task(db: Session, task_id: int, payload) -> TaskOut:
    task_id = _as_id(task_id)
    patch = _coerce(TaskUpdate, payload).model_dump(exclude_unset=True)
    if "title" in patch:
        patch["title"] = validate_task_title(patch["title"])
    if "description" in patch:
        patch["description"] = sanitize_description(patch["description"])
    if "priority" in patch:
        patch["priority"] = patch["priority"].value
    if patch.get("parent_id") == task_id:
        raise ValidationError("A task cannot be its own parent")
    return TaskOut.model_validate(TaskService.update(db, task_id, patch))


@command
def delete_task(db: Session, task_id: int) -> None:
    # Unknown ids are a silent no-op; descendants go with the task.
    TaskService.delete(db, _as_id(task_id))


@command
def reorder_task(db: Session, task_id: int, new_position: int) -> None:
    task_id = _as_id(task_id)
    data = _coerce(ReorderInput, {"new_position": new_position})
    TaskService.reorder(db, task_id, data.new_position)
