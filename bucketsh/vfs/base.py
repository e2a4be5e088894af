"""Levels: positions in the bucket tree.

A Level is an immutable handle on one bucket of an open store. Navigation
never changes a Level; it returns a new one whose ``parent`` points back
at the Level it came from.

Architecture:
    - Level: Operations shared by both kinds of position
    - RootLevel: The top of the tree (buckets only, no values)
    - BucketLevel: A nested bucket (values and buckets)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional
import logging

from rich.console import Console
from rich.markup import escape

from bucketsh.store import BucketStore, StoreError

logger = logging.getLogger(__name__)
console = Console()


class Level(ABC):
    """A position in the bucket tree.

    Attributes:
        store: The open store this level borrows from
        bucket_id: Store reference of the bucket (None for root)
        name: Name of the bucket ("" for root)
    """

    store: BucketStore
    bucket_id: Optional[int]
    name: str

    @abstractmethod
    def prev(self) -> Optional['Level']:
        """Return the parent level, or None at the root."""
        pass

    @abstractmethod
    def put(self, key: str, value: str) -> bool:
        """Store ``value`` at ``key``.

        Failures are reported on the console rather than raised.

        Returns:
            True if the value was stored
        """
        pass

    @property
    @abstractmethod
    def path(self) -> str:
        """Absolute display path, like /people/admins."""
        pass

    def cd(self, name: str) -> Optional['BucketLevel']:
        """Descend into the child bucket ``name``.

        Returns:
            The new level, or None if there is no such bucket
        """
        bucket_id = self.store.bucket(self.bucket_id, name)
        if bucket_id is None:
            return None
        return BucketLevel(self.store, bucket_id, name, self)

    def list(self) -> List[str]:
        """List keys for all values and buckets at this level.

        Bucket keys are suffixed with a slash. Entries come back in the
        store's key order.
        """
        return [
            f"{name}/" if is_bucket else name
            for name, is_bucket in self.store.entries(self.bucket_id)
        ]

    def get(self, key: str) -> Optional[bytes]:
        """Return the value at ``key``, or None if none found."""
        return self.store.get(self.bucket_id, key)

    def mkdir(self, key: str) -> bool:
        """Create a new bucket with the given key.

        Returns:
            True if the bucket was created
        """
        try:
            self.store.create_bucket(self.bucket_id, key)
        except StoreError as e:
            logger.debug(f"mkdir {key!r} at {self.path} rejected: {e}")
            console.print(f"[red]Unable to create bucket at key {escape(key)}: {escape(str(e))}[/red]")
            return False
        return True

    def root(self) -> 'Level':
        """Walk up to the top of the tree."""
        level = self
        parent = level.prev()
        while parent is not None:
            level = parent
            parent = level.prev()
        return level

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path='{self.path}')"


@dataclass(frozen=True, repr=False)
class RootLevel(Level):
    """The root of the store.

    The root holds only buckets: ``get`` always misses and ``put`` is
    always rejected.
    """

    store: BucketStore

    bucket_id = None
    name = ""

    def prev(self) -> None:
        return None

    def get(self, key: str) -> None:
        return None

    def put(self, key: str, value: str) -> bool:
        console.print("[red]Cannot store values at root level[/red]")
        return False

    @property
    def path(self) -> str:
        return "/"


@dataclass(frozen=True, repr=False)
class BucketLevel(Level):
    """A nested bucket.

    Attributes:
        parent: The level this one was reached from
    """

    store: BucketStore
    bucket_id: int
    name: str
    parent: Level

    def prev(self) -> Level:
        return self.parent

    def put(self, key: str, value: str) -> bool:
        try:
            self.store.put(self.bucket_id, key, value.encode('utf-8'))
        except StoreError as e:
            logger.debug(f"put {key!r} at {self.path} rejected: {e}")
            console.print(
                f"[red]Unable to store {escape(value)} at {escape(key)}: {escape(str(e))}[/red]"
            )
            return False
        return True

    @property
    def path(self) -> str:
        parent_path = self.parent.path
        if parent_path == "/":
            return f"/{self.name}"
        return f"{parent_path}/{self.name}"
