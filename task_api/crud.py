import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from . import models, schemas


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_id(task_id: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(task_id, uuid.UUID):
        return task_id
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        return None


def get_tasks(db: Session) -> List[models.Task]:
    """All tasks, newest first."""
    stmt = select(models.Task).order_by(models.Task.created_at.desc())
    return list(db.scalars(stmt).all())


def create_task(db: Session, task_in: schemas.TaskCreate) -> models.Task:
    """Insert a task with a fresh id; createdAt and updatedAt get the same instant."""
    now = _utcnow()
    task = models.Task(
        id=uuid.uuid4(),
        **task_in.model_dump(),
        created_at=now,
        updated_at=now,
    )
    db.add(task)
    db.commit()
    return task


def update_task(
    db: Session, task_id: Union[str, uuid.UUID], task_in: schemas.TaskUpdate
) -> Optional[models.Task]:
    """
    Replace every editable field of a task and refresh updatedAt.

    Returns None when no task has that id. createdAt is never written.
    """
    parsed_id = _parse_id(task_id)
    if parsed_id is None:
        return None
    stmt = (
        update(models.Task)
        .where(models.Task.id == parsed_id)
        .values(**task_in.model_dump(), updated_at=_utcnow())
        .returning(models.Task)
        .execution_options(populate_existing=True)
    )
    task = db.scalars(stmt).one_or_none()
    db.commit()
    return task


def delete_task(db: Session, task_id: Union[str, uuid.UUID]) -> bool:
    """Hard delete. Returns False when no task has that id."""
    parsed_id = _parse_id(task_id)
    if parsed_id is None:
        return False
    result = db.execute(delete(models.Task).where(models.Task.id == parsed_id))
    db.commit()
    return result.rowcount > 0
