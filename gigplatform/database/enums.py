"""
gigplatform/database/enums.py

Enumerations

Defines enumerations used across the platform:
- UserRole: Closed set of account roles (client, service provider, admin, super admin)
- VerificationStatus: Admin-controlled verification flag on client/provider profiles
"""

from enum import Enum


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum *values* (lowercase wire form) rather than member names."""
    return [member.value for member in enum_cls]


# ---------------------------------------------------
# User Role Enumeration
# ---------------------------------------------------
class UserRole(str, Enum):
    """
    Enum representing account roles for access control.
    Roles are mutually exclusive and fixed at account creation.
    """

    CLIENT = "client"
    SERVICE_PROVIDER = "service_provider"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def is_admin(self) -> bool:
        """admin and super_admin are interchangeable for every operation."""
        return self in ADMIN_ROLES


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})

# Roles that carry a verification profile
VERIFIABLE_ROLES = frozenset({UserRole.CLIENT, UserRole.SERVICE_PROVIDER})


# ---------------------------------------------------
# Verification Status Enumeration
# ---------------------------------------------------
class VerificationStatus(str, Enum):
    """
    Enum representing the verification state of a client or provider profile.

    Any value may be set from any other by an admin.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
