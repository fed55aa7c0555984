# tests/gig/test_lifecycle.py
import pytest

from gigplatform.database.enums import UserRole
from gigplatform.gig.lifecycle import (
    ALLOCATE,
    CANCEL,
    COMPLETE_WORK,
    START_WORK,
    TARGET_TRANSITIONS,
)
from gigplatform.gig.models import GigStatus


@pytest.mark.parametrize(
    ("transition", "allowed_from"),
    [
        (ALLOCATE, {GigStatus.OPEN}),
        (START_WORK, {GigStatus.ALLOCATED}),
        (COMPLETE_WORK, {GigStatus.IN_PROGRESS}),
        (CANCEL, {GigStatus.OPEN, GigStatus.ALLOCATED}),
    ],
)
def test_source_states(transition, allowed_from: set[GigStatus]) -> None:
    for status in GigStatus:
        assert transition.allows_from(status) is (status in allowed_from)


def test_terminal_states_have_no_exit() -> None:
    terminal = [s for s in GigStatus if s.is_terminal]

    assert terminal == [GigStatus.COMPLETED, GigStatus.CANCELLED]
    for transition in (ALLOCATE, START_WORK, COMPLETE_WORK, CANCEL):
        assert not any(transition.allows_from(s) for s in terminal)


def test_roles_and_owners() -> None:
    assert ALLOCATE.allows_role(UserRole.ADMIN)
    assert ALLOCATE.allows_role(UserRole.SUPER_ADMIN)
    assert not ALLOCATE.allows_role(UserRole.CLIENT)
    assert ALLOCATE.owner_field is None

    assert START_WORK.owner_field == COMPLETE_WORK.owner_field == "provider_id"
    assert CANCEL.owner_field == "client_id"
    assert not CANCEL.allows_role(UserRole.ADMIN)


def test_requestable_targets() -> None:
    assert set(TARGET_TRANSITIONS) == {GigStatus.IN_PROGRESS, GigStatus.COMPLETED, GigStatus.CANCELLED}
    assert GigStatus.OPEN not in TARGET_TRANSITIONS
    assert GigStatus.ALLOCATED not in TARGET_TRANSITIONS
