"""
Access Control

Role-based, relationship-scoped access to children's records.
"""

from .audit import AccessAuditor, AccessEntry, get_auditor
from .dependencies import (
    audited_child_id,
    authorized_child_id,
    ensure_child_access,
    get_current_user,
    require_role,
    require_session,
    valid_child_id,
)
from .gate import AccessDecision, DenyReason, check_child_access, visible_child_ids
from .roles import MANAGEMENT_ROLES, STAFF_ROLES, coerce_role

__all__ = [
    # Gate
    "AccessDecision",
    "DenyReason",
    "check_child_access",
    "visible_child_ids",
    # Roles
    "MANAGEMENT_ROLES",
    "STAFF_ROLES",
    "coerce_role",
    # Audit
    "AccessAuditor",
    "AccessEntry",
    "get_auditor",
    # Dependencies
    "require_session",
    "get_current_user",
    "require_role",
    "valid_child_id",
    "authorized_child_id",
    "audited_child_id",
    "ensure_child_access",
]
