"""SQLAlchemy models describing the content tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

ATTACHMENT_POST_TYPE = "attachment"


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class Post(Base):
    """Content record; media uploads carry the ``attachment`` post type."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(String(20), default="post", index=True)
    post_status: Mapped[str] = mapped_column(String(20), default="inherit")
    post_title: Mapped[str] = mapped_column(Text, default="")
    post_mime_type: Mapped[str] = mapped_column(String(100), default="")
    post_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    post_parent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    attached_file: Mapped[str | None] = mapped_column(String(256))

    files: Mapped[list["AttachmentFile"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )


class AttachmentFile(Base):
    """Generated variant of an attachment payload (thumbnail, resized copy)."""

    __tablename__ = "attachment_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"), nullable=False)
    size_name: Mapped[str] = mapped_column(String(64))
    storage_path: Mapped[str] = mapped_column(String(256), nullable=False)

    post: Mapped[Post] = relationship(back_populates="files")
