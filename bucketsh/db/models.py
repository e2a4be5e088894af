"""
SQLAlchemy models for the bucket store.

A single self-referencing table holds every bucket and value in the tree.
"""

from sqlalchemy import (
    Column, Integer, LargeBinary, Boolean, ForeignKey, UniqueConstraint, Index
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Entry(Base):
    """A named child of a bucket: either a nested bucket or a scalar value.

    Entries whose parent_id is NULL live directly under the root. The root
    itself has no row.
    """
    __tablename__ = 'entries'

    id = Column(Integer, primary_key=True)
    parent_id = Column(Integer, ForeignKey('entries.id', ondelete='CASCADE'))
    key = Column(LargeBinary, nullable=False)  # Raw key bytes, compared bytewise
    value = Column(LargeBinary)  # NULL for buckets
    is_bucket = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint('parent_id', 'key', name='uq_entry_parent_key'),
        Index('idx_entry_parent', 'parent_id'),
    )

    @property
    def name(self) -> str:
        return self.key.decode('utf-8', errors='replace')

    def __repr__(self):
        kind = 'bucket' if self.is_bucket else 'value'
        return f"<Entry(id={self.id}, key={self.key!r}, {kind})>"
