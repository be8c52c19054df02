# models/__init__.py
from flask_sqlalchemy import SQLAlchemy

from .base import Base
from .todo import Todo

db = SQLAlchemy(model_class=Base)

__all__ = ["db", "Base", "Todo"]
