"""
Database-backed bucket store for bucketsh.

Nested named buckets holding raw byte values, kept in one SQLite file
through SQLAlchemy. A store is opened once and all reads and writes go
through a single long-lived session, which is committed or rolled back
when the shell exits.

Bucket references are entry ids; the root bucket is ``None``.
"""

from contextlib import contextmanager
import errno
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.engine import Engine

from .db.models import Entry
from .db.session import init_db, get_session, close_db

logger = logging.getLogger(__name__)

BucketRef = Optional[int]


class StoreError(Exception):
    """Base class for store failures."""
    pass


class StoreOpenError(StoreError):
    """The store file exists but could not be opened as a store."""

    def __init__(self, filename, reason: str):
        super().__init__(reason)
        self.filename = str(filename)


class BucketExistsError(StoreError):
    def __init__(self):
        super().__init__("bucket already exists")


class IncompatibleValueError(StoreError):
    def __init__(self):
        super().__init__("incompatible value")


class KeyRequiredError(StoreError):
    def __init__(self):
        super().__init__("key required")


class BucketNameRequiredError(StoreError):
    def __init__(self):
        super().__init__("bucket name required")


class RootValueError(StoreError):
    def __init__(self):
        super().__init__("values cannot be stored at the root")


class BucketStore:
    """
    A tree of buckets stored in SQLite.

    Usage:
        store = BucketStore.open("data.db", create=True)
        with store.transaction():
            people = store.create_bucket(None, "people")
            store.put(people, "alice", b"admin")
            store.entries(people)  # [("alice", False)]
    """

    def __init__(self, path: Path, session: Session, engine: Engine):
        self.path = Path(path)
        self.session = session
        self._engine = engine

    @classmethod
    def open(
        cls,
        path: Path,
        create: bool = False,
        timeout: float = 1.0,
        echo: bool = False,
    ) -> 'BucketStore':
        """
        Open a store file.

        Args:
            path: Path to the store file
            create: Create the file if it does not exist
            timeout: Seconds to wait for a lock held by another process
            echo: If True, log all SQL statements

        Returns:
            BucketStore instance

        Raises:
            FileNotFoundError: If the file is missing and create is False
            StoreOpenError: If the file cannot be used as a store, or another
                session still holds its lock after timeout
        """
        path = Path(path)
        if not path.exists() and not create:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))

        try:
            engine = init_db(path, timeout=timeout, echo=echo)
        except SQLAlchemyError as e:
            raise StoreOpenError(path, str(e)) from e

        session = get_session()
        try:
            # Start the session-long transaction now so a store locked by
            # another session fails here rather than at the first write
            session.connection()
        except SQLAlchemyError as e:
            session.close()
            close_db(engine)
            raise StoreOpenError(path, str(e)) from e

        logger.debug(f"Opened store at {path}")
        return cls(path, session, engine)

    # Reads

    def _children(self, parent: BucketRef):
        query = self.session.query(Entry)
        if parent is None:
            return query.filter(Entry.parent_id.is_(None))
        return query.filter(Entry.parent_id == parent)

    def _child(self, parent: BucketRef, key: str) -> Optional[Entry]:
        return self._children(parent).filter(Entry.key == key.encode('utf-8')).first()

    def bucket(self, parent: BucketRef, name: str) -> Optional[int]:
        """Return the id of the bucket ``name`` directly under ``parent``, if any."""
        entry = self._child(parent, name)
        if entry is None or not entry.is_bucket:
            return None
        return entry.id

    def entries(self, parent: BucketRef) -> List[Tuple[str, bool]]:
        """
        List the direct children of a bucket in ascending key order.

        Returns:
            List of (name, is_bucket) tuples
        """
        # BLOB keys sort bytewise
        rows = self._children(parent).order_by(Entry.key).all()
        return [(entry.name, bool(entry.is_bucket)) for entry in rows]

    def get(self, parent: BucketRef, key: str) -> Optional[bytes]:
        """Return the value stored at ``key``, or None for a bucket or a missing key."""
        if parent is None:
            return None
        entry = self._child(parent, key)
        if entry is None or entry.is_bucket:
            return None
        return entry.value

    # Writes

    def put(self, parent: BucketRef, key: str, value: bytes) -> None:
        """
        Store a value, replacing any existing value at the same key.

        Raises:
            RootValueError: If parent is the root
            KeyRequiredError: If key is empty
            IncompatibleValueError: If key names a bucket
        """
        if parent is None:
            raise RootValueError()
        if not key:
            raise KeyRequiredError()

        entry = self._child(parent, key)
        if entry is not None and entry.is_bucket:
            raise IncompatibleValueError()

        with self._write():
            if entry is None:
                entry = Entry(parent_id=parent, key=key.encode('utf-8'), is_bucket=False)
                self.session.add(entry)
            entry.value = bytes(value)

        logger.debug(f"Stored {len(value)} bytes at {key!r} in bucket {parent}")

    def create_bucket(self, parent: BucketRef, name: str) -> int:
        """
        Create an empty bucket.

        Returns:
            Id of the new bucket

        Raises:
            BucketNameRequiredError: If name is empty
            BucketExistsError: If a bucket already exists at name
            IncompatibleValueError: If a value already exists at name
        """
        if not name:
            raise BucketNameRequiredError()

        existing = self._child(parent, name)
        if existing is not None:
            if existing.is_bucket:
                raise BucketExistsError()
            raise IncompatibleValueError()

        with self._write():
            entry = Entry(parent_id=parent, key=name.encode('utf-8'), is_bucket=True)
            self.session.add(entry)

        logger.debug(f"Created bucket {name!r} (id={entry.id}) in bucket {parent}")
        return entry.id

    @contextmanager
    def _write(self) -> Iterator[None]:
        # One SAVEPOINT per write: a failure undoes only that write and
        # the session-long transaction stays usable.
        try:
            with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    # Transaction control

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        logger.debug(f"Committed store {self.path}")

    def rollback(self) -> None:
        self.session.rollback()
        logger.debug(f"Rolled back store {self.path}")

    def close(self) -> None:
        """Close the session and release the file."""
        self.session.close()
        close_db(self._engine)

    @contextmanager
    def transaction(self) -> Iterator['BucketStore']:
        """
        Provide a transactional scope around a whole shell session.

        Usage:
            with store.transaction():
                shell.run()
                # Automatically commits or rolls back, then closes
        """
        try:
            yield self
            self.commit()
        except Exception:
            self.rollback()
            raise
        finally:
            self.close()
