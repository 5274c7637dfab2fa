"""Conversions between domain objects and flat table rows.

Both repository families store the same row shape (the columns in
``staybook.adapters.db.schema``): the SQL adapters write them to tables, the
in-memory adapters keep them in dicts. Reading back always goes through the
``*_from_row`` functions, so callers never share mutable state with the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from staybook.domain.aggregates import Booking, ChangeRoleRequest, Ticket
from staybook.domain.entities import (
    Coupon,
    Notification,
    Property,
    TicketReply,
    UserAccount,
)
from staybook.domain.value_objects import CouponUsage, Role, Severity, StayPeriod
from staybook.domain.workflows import ChangeRoleStatus, TicketStatus

Row = Mapping[str, Any]

# --- Users & properties ---


def user_to_row(user: UserAccount) -> dict[str, Any]:
    return {"user_id": user.user_id, "username": user.username, "role": user.role.value}


def user_from_row(row: Row) -> UserAccount:
    return UserAccount(
        user_id=row["user_id"], username=row["username"], role=Role(row["role"])
    )


def property_to_row(prop: Property) -> dict[str, Any]:
    return {
        "property_id": prop.property_id,
        "host_id": prop.host_id,
        "title": prop.title,
        "city": prop.city,
        "price_per_night": prop.price_per_night,
        "max_guests": prop.max_guests,
        "is_available": prop.is_available,
    }


def property_from_row(row: Row) -> Property:
    return Property(
        property_id=row["property_id"],
        host_id=row["host_id"],
        title=row["title"],
        price_per_night=row["price_per_night"],
        max_guests=int(row["max_guests"]),
        city=row["city"],
        is_available=bool(row["is_available"]),
    )


# --- Bookings ---


def booking_to_row(booking: Booking) -> dict[str, Any]:
    return {
        "booking_id": booking.aggregate_id,
        "property_id": booking.property_id,
        "host_id": booking.host_id,
        "user_id": booking.user_id,
        "check_in": booking.check_in,
        "check_out": booking.check_out,
        "num_adults": booking.num_adults,
        "num_children": booking.num_children,
        "confirmation_code": booking.confirmation_code,
        "total_amount": booking.total_amount,
        "applied_coupon_code": booking.applied_coupon_code,
        "created_at": booking.created_at,
        "canceled_at": booking.canceled_at,
    }


def booking_from_row(row: Row) -> Booking:
    return Booking(
        row["booking_id"],
        property_id=row["property_id"],
        host_id=row["host_id"],
        user_id=row["user_id"],
        period=StayPeriod(row["check_in"], row["check_out"]),
        num_adults=int(row["num_adults"]),
        num_children=int(row["num_children"]),
        confirmation_code=row["confirmation_code"],
        total_amount=row["total_amount"],
        applied_coupon_code=row["applied_coupon_code"],
        created_at=row["created_at"],
        canceled_at=row["canceled_at"],
    )


# --- Coupons ---


def coupon_to_row(coupon: Coupon) -> dict[str, Any]:
    return {
        "code": coupon.code,
        "discount_percentage": coupon.discount_percentage,
        "discount_amount": coupon.discount_amount,
        "expiry_date": coupon.expiry_date,
        "usage": coupon.usage.value,
    }


def coupon_from_row(row: Row) -> Coupon:
    return Coupon(
        code=row["code"],
        expiry_date=row["expiry_date"],
        discount_percentage=row["discount_percentage"],
        discount_amount=row["discount_amount"],
        usage=CouponUsage(row["usage"]),
    )


# --- Tickets ---


def ticket_to_row(ticket: Ticket, version: int) -> dict[str, Any]:
    return {
        "ticket_id": ticket.aggregate_id,
        "user_id": ticket.user_id,
        "title": ticket.title,
        "description": ticket.description,
        "status": ticket.status.value,
        "creation_date": ticket.creation_date,
        "closing_date": ticket.closing_date,
        "version": version,
    }


def ticket_from_row(row: Row) -> Ticket:
    return Ticket(
        row["ticket_id"],
        user_id=row["user_id"],
        title=row["title"],
        description=row["description"],
        creation_date=row["creation_date"],
        status=TicketStatus(row["status"]),
        closing_date=row["closing_date"],
        version=int(row["version"]),
    )


def reply_to_row(reply: TicketReply) -> dict[str, Any]:
    return {
        "reply_id": reply.reply_id,
        "ticket_id": reply.ticket_id,
        "author_id": reply.author_id,
        "content": reply.content,
        "from_moderator": reply.from_moderator,
        "created_at": reply.created_at,
    }


def reply_from_row(row: Row) -> TicketReply:
    return TicketReply(
        reply_id=row["reply_id"],
        ticket_id=row["ticket_id"],
        author_id=row["author_id"],
        content=row["content"],
        from_moderator=bool(row["from_moderator"]),
        created_at=row["created_at"],
    )


# --- Role-change requests ---


def change_role_to_row(request: ChangeRoleRequest, version: int) -> dict[str, Any]:
    return {
        "request_id": request.aggregate_id,
        "user_id": request.user_id,
        "motivation": request.motivation,
        "status": request.status.value,
        "created_at": request.created_at,
        "fulfilled_by": request.fulfilled_by,
        "fulfilled_at": request.fulfilled_at,
        "version": version,
    }


def change_role_from_row(row: Row) -> ChangeRoleRequest:
    return ChangeRoleRequest(
        row["request_id"],
        user_id=row["user_id"],
        motivation=row["motivation"],
        created_at=row["created_at"],
        status=ChangeRoleStatus(row["status"]),
        fulfilled_by=row["fulfilled_by"],
        fulfilled_at=row["fulfilled_at"],
        version=int(row["version"]),
    )


# --- Notifications ---


def notification_to_row(notification: Notification) -> dict[str, Any]:
    return {
        "notification_id": notification.notification_id,
        "recipient": notification.recipient,
        "message": notification.message,
        "severity": notification.severity.value,
        "created_at": notification.created_at,
        "read": notification.read,
    }


def notification_from_row(row: Row) -> Notification:
    return Notification(
        notification_id=row["notification_id"],
        recipient=row["recipient"],
        message=row["message"],
        severity=Severity(row["severity"]),
        created_at=row["created_at"],
        read=bool(row["read"]),
    )
