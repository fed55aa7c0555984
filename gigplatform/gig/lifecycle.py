"""
gigplatform/gig/lifecycle.py

Gig state machine.

    open --allocate_provider--> allocated --start_work--> in_progress --complete_work--> completed
      |                            |
      +----------cancel------------+------------------> cancelled

Completed and cancelled are terminal. Each action names the role allowed to
perform it, the gig column that must equal the actor's id (if any), and the
statuses it may start from.
"""

from dataclasses import dataclass

from gigplatform.database.enums import ADMIN_ROLES, UserRole
from gigplatform.gig.models import GigStatus


@dataclass(frozen=True)
class Transition:
    action: str
    roles: frozenset[UserRole]
    sources: frozenset[GigStatus]
    target: GigStatus
    owner_field: str | None = None

    def allows_role(self, role: UserRole) -> bool:
        return role in self.roles

    def allows_from(self, current: GigStatus) -> bool:
        return current in self.sources


ALLOCATE = Transition(
    action="allocate_provider",
    roles=ADMIN_ROLES,
    sources=frozenset({GigStatus.OPEN}),
    target=GigStatus.ALLOCATED,
)
START_WORK = Transition(
    action="start_work",
    roles=frozenset({UserRole.SERVICE_PROVIDER}),
    sources=frozenset({GigStatus.ALLOCATED}),
    target=GigStatus.IN_PROGRESS,
    owner_field="provider_id",
)
COMPLETE_WORK = Transition(
    action="complete_work",
    roles=frozenset({UserRole.SERVICE_PROVIDER}),
    sources=frozenset({GigStatus.IN_PROGRESS}),
    target=GigStatus.COMPLETED,
    owner_field="provider_id",
)
CANCEL = Transition(
    action="cancel",
    roles=frozenset({UserRole.CLIENT}),
    sources=frozenset({GigStatus.OPEN, GigStatus.ALLOCATED}),
    target=GigStatus.CANCELLED,
    owner_field="client_id",
)

# Targets reachable through the generic status endpoint.
TARGET_TRANSITIONS: dict[GigStatus, Transition] = {
    GigStatus.IN_PROGRESS: START_WORK,
    GigStatus.COMPLETED: COMPLETE_WORK,
    GigStatus.CANCELLED: CANCEL,
}

# Admin listing aliases.
ADMIN_STATUS_ALIASES: dict[str, GigStatus] = {
    "posted": GigStatus.OPEN,
    "allocated": GigStatus.ALLOCATED,
    "ongoing": GigStatus.IN_PROGRESS,
    "completed": GigStatus.COMPLETED,
}
