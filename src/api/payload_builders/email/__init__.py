"""Payload builders para Email (Azure Communication Services)."""

from .message import (
    USER_ENGAGEMENT_TRACKING_DISABLED,
    build_wire_message,
    serialize_wire_message,
)

__all__ = [
    "USER_ENGAGEMENT_TRACKING_DISABLED",
    "build_wire_message",
    "serialize_wire_message",
]
