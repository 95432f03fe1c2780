"""
Closed vocabularies shared by models, schemas and the access layer.
"""

from enum import StrEnum


class Role(StrEnum):
    """Active role a user acts under."""

    PARENT = "parent"
    TEACHER = "teacher"
    ADMIN = "admin"
    NETWORK_OWNER = "network_owner"


class DocumentType(StrEnum):
    MEDICAL_CERTIFICATE = "medical_certificate"
    VACCINATION = "vaccination"
    CONSENT = "consent"
    OTHER = "other"


class DocumentStatus(StrEnum):
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    PENDING = "pending"


class ActivityType(StrEnum):
    SLEEP = "sleep"
    MEAL = "meal"
    ACTIVITY = "activity"
    MEDICATION = "medication"
    MOOD = "mood"


class InvoiceStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class NotificationType(StrEnum):
    PAYMENT = "payment"
    MESSAGE = "message"
    EVENT = "event"
    URGENT = "urgent"


class NotificationPriority(StrEnum):
    URGENT = "urgent"
    NORMAL = "normal"
    SUMMARY = "summary"


class AllergySeverity(StrEnum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class ThreadType(StrEnum):
    DIRECT = "direct"
    GROUP_CHANNEL = "group_channel"
    ANNOUNCEMENT = "announcement"
