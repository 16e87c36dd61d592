"""Service-level helpers for creating, listing and voting on posts."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from subfapp.models import Community, Post, PostVote
from subfapp.schemas.identity import Identity
from subfapp.schemas.post import PostCreate
from subfapp.services.errors import (
    PostingNotAllowedError,
    PostNotFoundError,
    PostsNotVisibleError,
)
from subfapp.services.visibility import can_create_post, can_view_posts

# Configure logger for this module
logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR_NAME = "Anonymous"


def create_post(
    db: Session,
    community: Community,
    identity: Identity | None,
    data: PostCreate,
) -> Post:
    """Create a post after checking the caller may post in the community.

    Args:
        db: Database session.
        community: Target community, already resolved by the caller.
        identity: Authenticated caller, if any.
        data: Validated post payload.

    Returns:
        The persisted post.

    Raises:
        PostingNotAllowedError: If the caller is absent or not a member.

    Notes:
        ``author_name`` and ``community_name`` are copied as they are now and
        are not refreshed later.
    """
    if identity is None or not can_create_post(db, community, identity):
        raise PostingNotAllowedError()

    post = Post(
        title=data.title,
        body=data.body,
        images=list(data.images),
        author_id=identity.id,
        author_name=identity.display_name or ANONYMOUS_AUTHOR_NAME,
        community_id=community.id,
        community_name=community.name,
        votes=0,
        comment_count=0,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Identity %s posted %s in community %s", identity.id, post.id, community.id)
    return post


def list_posts(
    db: Session,
    community: Community,
    identity: Identity | None,
    *,
    limit: int = 50,
    before: int | None = None,
) -> list[Post]:
    """Return a community's posts, newest first.

    Raises:
        PostsNotVisibleError: If the caller may not see the community's posts.
    """
    if not can_view_posts(db, community, identity):
        raise PostsNotVisibleError()

    stmt = select(Post).where(Post.community_id == community.id)
    if before is not None:
        stmt = stmt.where(Post.id < before)
    stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).limit(limit)
    return list(db.scalars(stmt))


def get_post(
    db: Session,
    community: Community,
    post_id: int,
    identity: Identity | None,
) -> Post:
    """Return a single post from a community.

    Raises:
        PostsNotVisibleError: If the caller may not see the community's posts.
        PostNotFoundError: If the post does not exist in that community.
    """
    if not can_view_posts(db, community, identity):
        raise PostsNotVisibleError()

    post = db.scalar(
        select(Post).where(Post.id == post_id, Post.community_id == community.id)
    )
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def _record_vote(db: Session, post_id: int, voter_id: str, direction: int) -> int:
    """Write the identity's vote row and return the resulting tally delta.

    Repeating the current direction withdraws the vote; the opposite
    direction flips it.
    """
    existing = db.get(PostVote, (post_id, voter_id))
    if existing is None:
        db.add(PostVote(post_id=post_id, voter_id=voter_id, direction=direction))
        db.flush()
        return direction

    if existing.direction == direction:
        db.delete(existing)
        db.flush()
        return -direction

    existing.direction = direction
    db.flush()
    return 2 * direction


def vote(
    db: Session,
    community: Community,
    post_id: int,
    identity: Identity | None,
    direction: int,
) -> Post:
    """Cast, flip or withdraw the caller's vote on a post.

    Each identity holds at most one vote per post. Voting follows the
    posting rule: members only.

    Raises:
        PostingNotAllowedError: If the caller is absent or not a member.
        PostNotFoundError: If the post does not exist in that community.
    """
    if direction not in (1, -1):
        raise ValueError("direction must be +1 or -1")
    if identity is None or not can_create_post(db, community, identity):
        raise PostingNotAllowedError()

    post = db.scalar(
        select(Post).where(Post.id == post_id, Post.community_id == community.id)
    )
    if post is None:
        raise PostNotFoundError(post_id)

    try:
        delta = _record_vote(db, post_id, identity.id, direction)
    except IntegrityError:
        # A concurrent first vote by the same identity committed first.
        db.rollback()
        delta = _record_vote(db, post_id, identity.id, direction)

    db.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(votes=Post.votes + delta)
    )
    db.commit()
    db.refresh(post)
    return post
