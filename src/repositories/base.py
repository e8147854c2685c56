"""Session-scoped transaction and error handling shared by SQL repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.errors import RepositoryFailure

_TRANSACTION_DEPTH_KEY = "_gamenight_transaction_depth"


class BaseSqlRepository:
    """Repositories built on one shared Session.

    Nested ``transaction()`` blocks (also across repositories sharing the
    session) only flush; the outermost block commits, or rolls back on any
    exception. SQLAlchemy errors surface as RepositoryFailure.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        depth = int(self.session.info.get(_TRANSACTION_DEPTH_KEY, 0))
        self.session.info[_TRANSACTION_DEPTH_KEY] = depth + 1
        try:
            yield
            if depth == 0:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError as exc:
            if depth == 0:
                self.session.rollback()
            raise RepositoryFailure(f"database transaction failed: {exc}") from exc
        except BaseException:
            if depth == 0:
                self.session.rollback()
            raise
        finally:
            self.session.info[_TRANSACTION_DEPTH_KEY] = depth

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise RepositoryFailure(f"{action} failed: {exc}") from exc


__all__ = ["BaseSqlRepository"]
