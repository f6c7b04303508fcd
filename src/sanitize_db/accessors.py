"""
Entity accessor: reads and writes accounts and comments one record at a time.

Reads are keyset-paged on the primary key so that rows can be updated while
they are being enumerated. Every write runs inside a SAVEPOINT, so a failed
record is rolled back on its own and reported as ``RowWriteFailure`` without
discarding the rest of the open batch.
"""

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .core.users import User, UserMeta
from .content.comments import Comment
from .exceptions import BulkOperationFailure, RowWriteFailure
from .fields import key_variants, normalize_key


class EntityAccessor:
    """Account and comment access bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @contextmanager
    def _reading(self, table: str):
        # no rollback here: reads may run inside a record's SAVEPOINT
        try:
            yield
        except SQLAlchemyError as e:
            raise BulkOperationFailure('read', table, e) from e

    def _paged(self, query, id_column, batch_size: int) -> Iterator:
        last_id = None
        while True:
            page = query.order_by(id_column).limit(batch_size)
            if last_id is not None:
                page = page.where(id_column > last_id)
            with self._reading(id_column.class_.__tablename__):
                rows = list(self.session.execute(page).scalars())
            if not rows:
                return
            last_id = getattr(rows[-1], id_column.key)
            yield from rows

    def iter_accounts(self, batch_size: int = 1000) -> Iterator[User]:
        """Enumerate all accounts in ID order."""
        return self._paged(select(User), User.ID, batch_size)

    def iter_content(self, statuses: Iterable[str], excluded_types: Iterable[str] = (),
                     batch_size: int = 1000) -> Iterator[Comment]:
        """Enumerate comments in the given moderation states, skipping excluded types."""
        query = select(Comment).where(Comment.comment_approved.in_(list(statuses)))
        excluded = list(excluded_types)
        if excluded:
            query = query.where(Comment.comment_type.notin_(excluded))
        return self._paged(query, Comment.comment_ID, batch_size)

    def count_accounts(self) -> int:
        with self._reading(User.__tablename__):
            return self.session.query(User).count()

    def get_account_meta(self, user_id: int, keys: Iterable[str]) -> Dict[str, str]:
        """Current values of the given attributes of one account, by logical key."""
        variants = [variant for key in keys for variant in key_variants(key)]
        with self._reading(UserMeta.__tablename__):
            rows = self.session.execute(
                select(UserMeta.meta_key, UserMeta.meta_value)
                .where(UserMeta.user_id == user_id, UserMeta.meta_key.in_(variants))
            ).all()
        return {normalize_key(key): value for key, value in rows}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @contextmanager
    def atomic(self, table: str, row_id):
        """
        Group several writes to one record: all of them apply or none do.

        Raises:
            RowWriteFailure: any write in the block failed (already rolled back)
        """
        try:
            with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            raise RowWriteFailure(table, row_id, e) from e

    def _write(self, table: str, row_id, stmt) -> int:
        try:
            with self.session.begin_nested():
                return self.session.execute(
                    stmt, execution_options={'synchronize_session': False}
                ).rowcount
        except SQLAlchemyError as e:
            raise RowWriteFailure(table, row_id, e) from e

    def update_account(self, user_id: int, fields: Dict[str, str]) -> int:
        """Update core columns of one account."""
        stmt = update(User).where(User.ID == user_id).values(**fields)
        return self._write(User.__tablename__, user_id, stmt)

    def update_account_meta(self, user_id: int, key: str, value: str) -> int:
        """
        Overwrite an existing attribute of one account (both key variants).

        Attributes the account does not have are not created.
        """
        stmt = (
            update(UserMeta)
            .where(UserMeta.user_id == user_id, UserMeta.meta_key.in_(key_variants(key)))
            .values(meta_value=value)
        )
        return self._write(UserMeta.__tablename__, user_id, stmt)

    def update_content(self, comment_id: int, fields: Dict[str, str]) -> int:
        """Update core columns of one comment."""
        stmt = update(Comment).where(Comment.comment_ID == comment_id).values(**fields)
        return self._write(Comment.__tablename__, comment_id, stmt)

    def commit(self):
        """
        Commit the open batch.

        Raises:
            BulkOperationFailure: the commit failed (session rolled back)
        """
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BulkOperationFailure('commit', 'batch', e) from e
