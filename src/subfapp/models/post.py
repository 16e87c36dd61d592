"""SQLAlchemy model for community posts."""
from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from subfapp.db.session import Base
from subfapp.db.time import utcnow


class Post(Base):
    """Text and image content scoped to exactly one community.

    ``author_name`` and ``community_name`` are copies taken when the post is
    written. They are not updated if the identity or community is renamed.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"),
                                    primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    # Ordered list of image references (upload paths or data URLs).
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    author_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(Text, nullable=False)

    community_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("community.id"),
        nullable=False,
        index=True,
    )
    community_name: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
