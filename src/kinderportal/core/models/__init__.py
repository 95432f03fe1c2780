"""
KinderPortal SQLAlchemy Models

Organizations → facilities → groups → children, plus the users, staff and
per-child records hanging off that tree.
"""

from .activities import (
    AttendanceRecord,
    DailyActivity,
    ExtraClassAttendance,
    ExtraClassPerformance,
)
from .audit import AccessLog
from .base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin
from .billing import AdditionalService, Invoice, Subscription
from .chat import ChatParticipant, ChatThread, Message, MessageReadReceipt
from .children import (
    Child,
    ChildAllergy,
    ChildDocument,
    ChildHealth,
    ChildMedication,
    ChildParent,
    TrustedContact,
)
from .engagement import Event, ExtraClass, ExtraClassEnrollment, Notification
from .enums import (
    ActivityType,
    AllergySeverity,
    DocumentStatus,
    DocumentType,
    InvoiceStatus,
    NotificationPriority,
    NotificationType,
    Role,
    ThreadType,
)
from .organizations import Facility, Group, Organization
from .staff import Staff, StaffGroupAssignment
from .users import User, UserRole

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "CreatedAtMixin",
    "TimestampMixin",
    # Enums
    "Role",
    "DocumentType",
    "DocumentStatus",
    "ActivityType",
    "InvoiceStatus",
    "NotificationType",
    "NotificationPriority",
    "AllergySeverity",
    "ThreadType",
    # Users
    "User",
    "UserRole",
    # Organizations
    "Organization",
    "Facility",
    "Group",
    # Staff
    "Staff",
    "StaffGroupAssignment",
    # Children
    "Child",
    "ChildParent",
    "ChildHealth",
    "ChildAllergy",
    "ChildMedication",
    "ChildDocument",
    "TrustedContact",
    # Daily records
    "AttendanceRecord",
    "DailyActivity",
    "ExtraClassAttendance",
    "ExtraClassPerformance",
    # Chat
    "ChatThread",
    "ChatParticipant",
    "Message",
    "MessageReadReceipt",
    # Billing
    "Subscription",
    "Invoice",
    "AdditionalService",
    # Engagement
    "Notification",
    "Event",
    "ExtraClass",
    "ExtraClassEnrollment",
    # Audit
    "AccessLog",
]
