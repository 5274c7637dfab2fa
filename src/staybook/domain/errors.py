"""Domain-layer error definitions.

Every error carries a stable ``code`` class attribute. Boundaries (HTTP, CLI)
map on ``code`` or on the class, never on the message text.
"""

from __future__ import annotations

from enum import Enum

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""

    code: str = "domain_error"


class EntityNotFound(DomainError):
    """Raised when a booking, ticket, request or other entity does not exist."""

    code = "entity_not_found"

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} ({key}) not found.")
        self.kind = kind
        self.key = key


class UserUnauthorized(DomainError):
    """Raised when the acting user may not perform the mutation."""

    code = "user_unauthorized"

    def __init__(self, user_id: str, action: str) -> None:
        super().__init__(f"User {user_id} is not allowed to {action}.")
        self.user_id = user_id
        self.action = action


class ConcurrentModification(DomainError):
    """Raised when an entity changed between load and save (lost update)."""

    code = "concurrent_modification"

    def __init__(self, kind: str, key: str, expected_version: int) -> None:
        super().__init__(
            f"{kind} ({key}) was modified concurrently; "
            f"expected version {expected_version}."
        )
        self.kind = kind
        self.key = key
        self.expected_version = expected_version


# ============================================================================
#                           Reservation errors
# ============================================================================


class InvalidBookingRequest(DomainError):
    """Raised when a booking request violates its preconditions."""

    code = "invalid_booking_request"


class UnavailableProperty(DomainError):
    """Raised when a property is unavailable, over capacity, or already booked."""

    code = "unavailable_property"

    def __init__(self, property_id: str, reason: str) -> None:
        super().__init__(f"Property {property_id} is unavailable: {reason}.")
        self.property_id = property_id
        self.reason = reason


class CouponError(DomainError):
    """Base class for coupon redemption errors."""

    def __init__(self, coupon_code: str, message: str) -> None:
        super().__init__(message)
        self.coupon_code = coupon_code


class CouponNotFound(CouponError):
    """Raised when no coupon exists for the supplied code."""

    code = "coupon_not_found"

    def __init__(self, coupon_code: str) -> None:
        super().__init__(coupon_code, f"Coupon {coupon_code} does not exist.")


class CouponExpired(CouponError):
    """Raised when the coupon's expiry date has passed."""

    code = "coupon_expired"

    def __init__(self, coupon_code: str) -> None:
        super().__init__(coupon_code, f"Coupon {coupon_code} has expired.")


class CouponAlreadyUsed(CouponError):
    """Raised when a single-use coupon has already been redeemed."""

    code = "coupon_already_used"

    def __init__(self, coupon_code: str) -> None:
        super().__init__(coupon_code, f"Coupon {coupon_code} has already been used.")


# ============================================================================
#                           Workflow errors
# ============================================================================


class IllegalStateTransition(DomainError):
    """Raised when a workflow action is not legal from the current state."""

    code = "illegal_state_transition"

    def __init__(self, entity: str, state: Enum, action: Enum | str) -> None:
        action_name = action.value if isinstance(action, Enum) else action
        super().__init__(f"{entity} cannot '{action_name}' while in state {state.value}.")
        self.entity = entity
        self.state = state
        self.action = action


class DuplicatePendingRequest(DomainError):
    """Raised when a user already has a pending role-change request."""

    code = "duplicate_pending_request"

    def __init__(self, user_id: str, request_id: str | None = None) -> None:
        which = f" ({request_id})" if request_id else ""
        super().__init__(
            f"User {user_id} already has a pending role-change request{which}."
        )
        self.user_id = user_id
        self.request_id = request_id
