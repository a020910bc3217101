"""Core enums used across modules."""

from enum import StrEnum


class SessionStatusEnum(StrEnum):
    """Booking/session lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ServiceTypeEnum(StrEnum):
    """Billing unit of an expert service."""

    THIRTY_MINUTES = "30_min"
    ONE_HOUR = "1_hour"
    ONE_WEEK = "1_week"
    ONE_MONTH = "1_month"

    @property
    def is_per_session(self) -> bool:
        """Per-session services never expire on their own."""
        return self in (ServiceTypeEnum.THIRTY_MINUTES, ServiceTypeEnum.ONE_HOUR)


class ConversationStatusEnum(StrEnum):
    """Conversation channel status."""

    ACTIVE = "active"
    CLOSED = "closed"


class MessageTypeEnum(StrEnum):
    TEXT = "text"
    SYSTEM = "system"


class WaitlistStatusEnum(StrEnum):
    """Waitlist entry review status."""

    PENDING = "pending"
    INVITED = "invited"
    REJECTED = "rejected"
