import enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, String, Text, Uuid

from .database import Base


class TaskStatus(str, enum.Enum):
    """Enum for task statuses."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


STATUS_VALUES = ", ".join(f"'{s.value}'" for s in TaskStatus)


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(f"status IN ({STATUS_VALUES})", name="ck_tasks_status"),
        CheckConstraint("length(title) > 0", name="ck_tasks_title_not_empty"),
    )

    id = Column(Uuid, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False)
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Task id={self.id}, status={self.status}>"
