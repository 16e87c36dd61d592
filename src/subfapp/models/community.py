"""SQLAlchemy models for communities and their membership ledger."""
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from subfapp.db.session import Base
from subfapp.db.time import utcnow

ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"
MEMBERSHIP_ROLES = (ROLE_MEMBER, ROLE_ADMIN)


class Community(Base):
    """A named, joinable group scoping posts."""

    __tablename__ = "community"
    __table_args__ = (
        CheckConstraint("member_count >= 0", name="ck_community_member_count_nonnegative"),
    )

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"),
                                    primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Derived from name at creation time and never recomputed.
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Display cache of the membership ledger size; see services.counter.
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    creator_id: Mapped[str] = mapped_column(String(128), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class CommunityMember(Base):
    """One identity's membership in one community.

    The composite primary key guarantees a single record per pair.
    """

    __tablename__ = "community_member"

    community_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("community.id"),
        primary_key=True,
    )
    identity_id: Mapped[str] = mapped_column(String(128), primary_key=True, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_MEMBER)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
