"""
Todo Model
SQLAlchemy 2.0-safe model for the single todo list the application tracks.
"""

from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime, Boolean, Index, func, false
from .base import Base

TITLE_MAX_LENGTH = 255
# Largest value a portable INTEGER primary key can hold
MAX_TODO_ID = 2**31 - 1


def _utcnow() -> datetime:
    # Naive UTC with microseconds so rows created within the same second still sort
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Todo(Base):
    """
    A single task with a title, a completion flag and a creation timestamp.
    `id` and `created_at` are assigned at insert time and never change.
    """
    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, server_default=func.now()
    )

    __table_args__ = (
        # Listing order: newest first
        Index('ix_todos_created_at', 'created_at'),
    )

    def __repr__(self):
        return f'<Todo {self.id}: {self.title}>'

    def toggle(self):
        """Flip the completion flag."""
        self.completed = not self.completed

    def to_dict(self):
        """Convert todo to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'completed': bool(self.completed),
            'created_at': self.created_at.replace(tzinfo=timezone.utc).isoformat() if self.created_at else None,
        }
