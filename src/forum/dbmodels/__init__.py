"""
Database models for the Forum (authoritative ORM definitions).

The tables already exist in the deployed database; these mappings describe
their layout. Identifiers are application-generated opaque strings and
timestamps are assigned by the database at insert time.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.functions import FunctionElement

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class insert_timestamp(FunctionElement):
    """Database-assigned creation time.

    SQLite's CURRENT_TIMESTAMP only has one-second resolution, so it gets a
    millisecond timestamp instead; other backends use CURRENT_TIMESTAMP.
    """

    type = DateTime(True)
    inherit_cache = True


@compiles(insert_timestamp)
def _compile_insert_timestamp(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(insert_timestamp, "sqlite")
def _compile_insert_timestamp_sqlite(element, compiler, **kw):
    return "(strftime('%Y-%m-%d %H:%M:%f', 'now'))"


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("username", name="users_username_key"),
    )

    id: Mapped[str] = mapped_column(String(36))
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=insert_timestamp()
    )


class Threads(Base):
    __tablename__ = "threads"
    __table_args__ = (
        ForeignKeyConstraint(["created_by"], ["users.id"], name="threads_created_by_fkey"),
        PrimaryKeyConstraint("id", name="threads_pkey"),
        Index("idx_threads_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=insert_timestamp()
    )


class Replies(Base):
    __tablename__ = "replies"
    __table_args__ = (
        ForeignKeyConstraint(["thread_id"], ["threads.id"], name="replies_thread_id_fkey"),
        ForeignKeyConstraint(["created_by"], ["users.id"], name="replies_created_by_fkey"),
        PrimaryKeyConstraint("id", name="replies_pkey"),
        Index("idx_replies_thread", "thread_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36))
    thread_id: Mapped[str] = mapped_column(String(36), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=insert_timestamp()
    )


class Likes(Base):
    __tablename__ = "likes"
    __table_args__ = (
        ForeignKeyConstraint(["thread_id"], ["threads.id"], name="likes_thread_id_fkey"),
        ForeignKeyConstraint(["reply_id"], ["replies.id"], name="likes_reply_id_fkey"),
        ForeignKeyConstraint(["created_by"], ["users.id"], name="likes_created_by_fkey"),
        PrimaryKeyConstraint("id", name="likes_pkey"),
        # A like targets exactly one of a thread or a reply
        CheckConstraint(
            "(thread_id IS NULL) <> (reply_id IS NULL)",
            name="likes_single_target_check",
        ),
        Index("idx_likes_thread", "thread_id"),
        Index("idx_likes_reply", "reply_id"),
    )

    id: Mapped[str] = mapped_column(String(36))
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    thread_id: Mapped[str | None] = mapped_column(String(36))
    reply_id: Mapped[str | None] = mapped_column(String(36))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=insert_timestamp()
    )


__all__ = ["Base", "Users", "Threads", "Replies", "Likes", "insert_timestamp"]
