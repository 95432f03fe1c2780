"""Pydantic schemas for API validation."""

from .activities import (
    AttendanceMark,
    AttendanceSchema,
    DailyActivityCreate,
    DailyActivitySchema,
    ExtraClassAttendanceSchema,
    ExtraClassPerformanceSchema,
)
from .billing import AdditionalServiceSchema, InvoiceSchema, SubscriptionSchema
from .chat import ChatThreadSchema, MessageCreate, MessageSchema, ReadReceiptSchema
from .children import (
    AllergySchema,
    ChildCreate,
    ChildOverviewSchema,
    ChildParentCreate,
    ChildParentSchema,
    ChildSchema,
    DocumentSchema,
    HealthSchema,
    MedicationSchema,
    TrustedContactCreate,
    TrustedContactSchema,
)
from .engagement import (
    ChildEnrollmentSchema,
    EnrollmentSchema,
    EventSchema,
    ExtraClassSchema,
    NotificationSchema,
)
from .organizations import (
    FacilityCreate,
    FacilitySchema,
    GroupCreate,
    GroupSchema,
    OrganizationCreate,
    OrganizationSchema,
    StaffAssignmentCreate,
    StaffAssignmentSchema,
    StaffCreate,
    StaffSchema,
)
from .users import (
    LoginRequest,
    RoleAssignmentSchema,
    RoleSwitchRequest,
    UserSchema,
    UserSummary,
)

__all__ = [
    # Users
    "LoginRequest",
    "RoleSwitchRequest",
    "RoleAssignmentSchema",
    "UserSummary",
    "UserSchema",
    # Organizations
    "OrganizationCreate",
    "OrganizationSchema",
    "FacilityCreate",
    "FacilitySchema",
    "GroupCreate",
    "GroupSchema",
    "StaffCreate",
    "StaffSchema",
    "StaffAssignmentCreate",
    "StaffAssignmentSchema",
    # Children
    "ChildCreate",
    "ChildSchema",
    "ChildOverviewSchema",
    "AllergySchema",
    "MedicationSchema",
    "DocumentSchema",
    "HealthSchema",
    "ChildParentCreate",
    "ChildParentSchema",
    "TrustedContactCreate",
    "TrustedContactSchema",
    # Daily records
    "DailyActivityCreate",
    "DailyActivitySchema",
    "AttendanceMark",
    "AttendanceSchema",
    "ExtraClassAttendanceSchema",
    "ExtraClassPerformanceSchema",
    # Billing
    "InvoiceSchema",
    "SubscriptionSchema",
    "AdditionalServiceSchema",
    # Chat
    "ChatThreadSchema",
    "MessageCreate",
    "MessageSchema",
    "ReadReceiptSchema",
    # Engagement
    "NotificationSchema",
    "EventSchema",
    "ExtraClassSchema",
    "EnrollmentSchema",
    "ChildEnrollmentSchema",
]
