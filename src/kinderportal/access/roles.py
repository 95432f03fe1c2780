"""
Role groupings used by route guards.

`Role` itself lives with the models so the data layer stays a leaf.
"""

from kinderportal.core.models.enums import Role

# Roles allowed to record daily activities and attendance
STAFF_ROLES: tuple[Role, ...] = (Role.TEACHER, Role.ADMIN, Role.NETWORK_OWNER)

# Roles allowed to change the organizational structure
MANAGEMENT_ROLES: tuple[Role, ...] = (Role.ADMIN, Role.NETWORK_OWNER)


def coerce_role(value: object) -> Role | None:
    """Map a stored role value onto the closed Role enum.

    Returns None for a missing role or any value outside the enum.
    """
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value))
    except ValueError:
        return None


__all__ = ["Role", "STAFF_ROLES", "MANAGEMENT_ROLES", "coerce_role"]
