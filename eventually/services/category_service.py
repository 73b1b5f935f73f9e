"""
category_service.py — Category CRUD
Raw data access: no input rules are applied here, storage errors propagate
after the session is rolled back.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy import asc

from eventually.database import now_ts
from eventually.errors import NotFound
from eventually.models.category import Category
from eventually.services.task_service import TaskService

logger = logging.getLogger(__name__)


class CategoryService:
    @staticmethod
    def create(db: Session, name: str, color: str) -> Category:
        now = now_ts()
        category = Category(name=name, color=color, created_at=now, updated_at=now)
        try:
            db.add(category)
            db.commit()
            db.refresh(category)
        except Exception:
            db.rollback()
            raise
        logger.debug("Category created id=%s name=%s", category.id, category.name)
        return category

    @staticmethod
    def get_all(db: Session) -> list[Category]:
        """All categories, ordered by name."""
        return db.query(Category).order_by(asc(Category.name)).all()

    @staticmethod
    def update(db: Session, category_id: int, data: dict) -> Category:
        """Patch only the supplied fields; updated_at is always refreshed."""
        try:
            category = db.get(Category, category_id)
            if category is None:
                raise NotFound(f"Category {category_id} not found")

            for key in ("name", "color"):
                if key in data:
                    setattr(category, key, data[key])
            category.updated_at = now_ts()

            db.commit()
            db.refresh(category)
            return category
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete(db: Session, category_id: int) -> bool:
        """Remove the row; tasks pointing at it get category_id cleared by the store.

        Those tasks are first appended to their uncategorised groups so the
        positions there stay dense.

        Returns False when nothing was deleted.
        """
        try:
            TaskService.rehome_category_tasks(db, category_id)
            deleted = (
                db.query(Category)
                .filter(Category.id == category_id)
                .delete(synchronize_session=False)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.debug("Category delete id=%s rows=%s", category_id, deleted)
        return deleted > 0
