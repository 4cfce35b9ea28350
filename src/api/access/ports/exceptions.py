"""Exceptions for the access bounded context.

Every failure the engine reports is one of a closed set of kinds
(`ErrorKind`), so callers can match exhaustively on `error.kind` instead of
inspecting messages. "No access" is never an error: the resolver reports it
as `PermissionSource.NONE`.

`public_message` is safe to show to end users; it never contains internal
identifiers or query text. The full message (``str(error)``) is for logs.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed enumeration of access-control failure kinds."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    SELF_GRANT = "self_grant"
    SELF_SHARE = "self_share"
    FORBIDDEN = "forbidden"
    NOT_OWNER = "not_owner"
    TARGET_NOT_FOUND = "target_not_found"
    TARGET_INACTIVE = "target_inactive"
    NO_OP_TRANSFER = "no_op_transfer"
    OWNED_INVENTORIES_REMAIN = "owned_inventories_remain"
    UNAVAILABLE = "unavailable"


class AccessControlError(Exception):
    """Base class for all access-control failures."""

    kind: ErrorKind
    public_message: str = "The request could not be completed"
    retryable: bool = False


class NotFoundError(AccessControlError):
    """Raised when a referenced user, inventory, share or grant does not exist."""

    kind = ErrorKind.NOT_FOUND
    public_message = "Not found"


class AlreadyExistsError(AccessControlError):
    """Raised when creating a grant or share that already exists.

    Callers with idempotent intent may treat this as success.
    """

    kind = ErrorKind.ALREADY_EXISTS
    public_message = "Already exists"


class SelfGrantError(AccessControlError):
    """Raised when a user attempts to grant all access to themselves."""

    kind = ErrorKind.SELF_GRANT
    public_message = "Cannot grant access to yourself"


class SelfShareError(AccessControlError):
    """Raised when sharing an inventory with its own owner."""

    kind = ErrorKind.SELF_SHARE
    public_message = "Cannot share an inventory with its owner"


class ForbiddenError(AccessControlError):
    """Raised when the acting user lacks the capability an operation needs.

    Presentation layers should answer 403 without exposing internal details.
    """

    kind = ErrorKind.FORBIDDEN
    public_message = "Insufficient permissions"


class NotOwnerError(AccessControlError):
    """Raised when a non-owner, non-admin user attempts an ownership transfer."""

    kind = ErrorKind.NOT_OWNER
    public_message = "Only the owner can transfer ownership of an inventory"


class TargetNotFoundError(AccessControlError):
    """Raised when the new owner of a transfer does not exist."""

    kind = ErrorKind.TARGET_NOT_FOUND
    public_message = "Target user not found"


class TargetInactiveError(AccessControlError):
    """Raised when the new owner of a transfer is deactivated."""

    kind = ErrorKind.TARGET_INACTIVE
    public_message = "Cannot transfer ownership to an inactive user"


class NoOpTransferError(AccessControlError):
    """Raised when the new owner of a transfer is already the owner."""

    kind = ErrorKind.NO_OP_TRANSFER
    public_message = "The user already owns this inventory"


class OwnedInventoriesRemainError(AccessControlError):
    """Raised when removing a user's relationships while they still own inventories.

    Every inventory the user owns must be transferred or deleted first.
    """

    kind = ErrorKind.OWNED_INVENTORIES_REMAIN
    public_message = "Transfer or delete the user's inventories first"


class UnavailableError(AccessControlError):
    """Raised on transient infrastructure failure (connection loss, timeout).

    Retry the operation; this is never a permission denial.
    """

    kind = ErrorKind.UNAVAILABLE
    public_message = "Service temporarily unavailable, please retry"
    retryable = True
