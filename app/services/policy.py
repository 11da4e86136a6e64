"""Ownership/admin authorization rules for posts, comments and admin actions.

Predicates are pure: they only read ``id``/``is_admin`` from the actor and
``user_id`` from the resource, so they work on ORM rows and on CurrentUser alike.
"""

from typing import Protocol

from app.core.errors import ApiError

UPDATE_POST_DENIED = "Unauthorized. You can only update your own posts."
DELETE_POST_DENIED = "Unauthorized. You can only delete your own posts."
UPDATE_COMMENT_DENIED = "Unauthorized. You can only update your own comments."
DELETE_COMMENT_DENIED = (
    "Unauthorized. You can only delete your own comments or comments on your posts."
)
ADMIN_ONLY_DENIED = "Unauthorized. Only admins can perform this action."


class Actor(Protocol):
    id: int
    is_admin: bool


class Owned(Protocol):
    user_id: int


def _owns(actor: Actor, resource: Owned) -> bool:
    return actor.id == resource.user_id


def can_modify_post(actor: Actor, post: Owned) -> bool:
    return _owns(actor, post) or bool(actor.is_admin)


def can_delete_post(actor: Actor, post: Owned) -> bool:
    return _owns(actor, post) or bool(actor.is_admin)


def can_modify_comment(actor: Actor, comment: Owned) -> bool:
    return _owns(actor, comment) or bool(actor.is_admin)


def can_delete_comment(actor: Actor, comment: Owned, post: Owned) -> bool:
    """Comment owner, the owner of the post it sits on, or an admin."""
    return _owns(actor, comment) or _owns(actor, post) or bool(actor.is_admin)


def can_set_admin_status(actor: Actor) -> bool:
    return bool(actor.is_admin)


def authorize(allowed: bool, message: str) -> None:
    """Raise an authorization-denied ApiError unless allowed."""
    if not allowed:
        raise ApiError.forbidden(message)
