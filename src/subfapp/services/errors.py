"""Domain errors raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""


class SubfappError(Exception):
    """Base class for service-layer failures."""


class MembershipError(SubfappError):
    """Policy violation on a membership ledger mutation."""

    def __init__(self, community_id: int, identity_id: str, message: str) -> None:
        super().__init__(message)
        self.community_id = community_id
        self.identity_id = identity_id


class AlreadyMemberError(MembershipError):
    """Raised when joining a community the identity already belongs to."""

    def __init__(self, community_id: int, identity_id: str) -> None:
        super().__init__(community_id, identity_id, "Already a member of this community")


class NotAMemberError(MembershipError):
    """Raised when leaving a community the identity does not belong to."""

    def __init__(self, community_id: int, identity_id: str) -> None:
        super().__init__(community_id, identity_id, "Not a member of this community")


class CommunityNotFoundError(SubfappError):
    """Raised when a community id or slug resolves to nothing."""

    def __init__(self, ref: int | str) -> None:
        super().__init__("Community not found")
        self.ref = ref


class SlugTakenError(SubfappError):
    """Raised when a new community's slug collides with an existing one."""

    def __init__(self, slug: str) -> None:
        super().__init__("Community slug already exists")
        self.slug = slug


class NotCommunityCreatorError(SubfappError):
    """Raised when someone other than the creator edits a community."""

    def __init__(self) -> None:
        super().__init__("Only the community creator can do this")


class PostingNotAllowedError(SubfappError):
    """Raised when the visibility gate refuses post creation."""

    def __init__(self) -> None:
        super().__init__("Join this community to post")


class PostsNotVisibleError(SubfappError):
    """Raised when the visibility gate refuses post listing."""

    def __init__(self) -> None:
        super().__init__("Join this community to see its posts")


class PostNotFoundError(SubfappError):
    """Raised when a post does not exist in the requested community."""

    def __init__(self, post_id: int) -> None:
        super().__init__("Post not found")
        self.post_id = post_id


class UploadError(SubfappError):
    """Raised when an uploaded image is rejected or cannot be stored."""
