"""Key-value model backing the persistence substrate."""

from sqlalchemy import Column, String, Text
from .base import Base, TimestampMixin


class StorageEntry(Base, TimestampMixin):
    """
    One serialized collection blob.

    Keys are fixed per collection (users, patients, incidents) plus the
    auth session; the value is the whole collection as JSON text.
    """

    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
