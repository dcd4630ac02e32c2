"""
Todo storage accessor.

Thin wrapper around the ``todo`` table. Every call goes to the database;
nothing is cached. SQLAlchemy failures are re-raised as ``StorageError``
subclasses so callers only deal with one error family.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from database import Todo, create_tables
from errors import ConnectionPoolError, SQLExecutionError

logger = logging.getLogger(__name__)


class TodoEntry(BaseModel):
    id: int
    text: str

    class Config:
        from_attributes = True


@contextmanager
def _storage_errors(db: Optional[Session] = None):
    try:
        yield
    except sa_exc.TimeoutError as e:
        if db is not None:
            db.rollback()
        raise ConnectionPoolError(str(e)) from e
    except sa_exc.SQLAlchemyError as e:
        if db is not None:
            db.rollback()
        raise SQLExecutionError(str(e)) from e


def ensure_schema(engine: Engine):
    """Create the ``todo`` table if it does not exist yet"""
    with _storage_errors():
        create_tables(engine)
    logger.info("Todo table ready at: %s", engine.url)


def list_all(db: Session) -> List[TodoEntry]:
    """Return every entry in whatever order the engine yields rows"""
    with _storage_errors(db):
        rows = db.query(Todo).all()
        return [TodoEntry.model_validate(row) for row in rows]


def insert(db: Session, text: str) -> int:
    """Store a new entry and return the id the database assigned to it"""
    with _storage_errors(db):
        todo = Todo(text=text)
        db.add(todo)
        db.flush()
        todo_id = todo.id
        db.commit()
    logger.info("Added todo %d (%d chars)", todo_id, len(text))
    return todo_id


def delete_by_id(db: Session, todo_id: int):
    """Remove the entry with ``todo_id``; unknown ids are ignored"""
    with _storage_errors(db):
        deleted = db.query(Todo).filter(Todo.id == todo_id).delete()
        db.commit()
    logger.info("Deleted todo %d (%d rows)", todo_id, deleted)
