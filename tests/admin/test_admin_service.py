from __future__ import annotations

import pytest

from src.mailroom.mailroom.admin.service import AdminAuthService
from src.mailroom.mailroom.core.exceptions import AuthenticationError


def test_password_checks():
    service = AdminAuthService.from_password("hunter2")

    assert service.check_password("hunter2") is True
    assert service.check_password("wrong") is False
    assert service.check_password("") is False
    service.authenticate("hunter2")


def test_wrong_password_raises():
    with pytest.raises(AuthenticationError):
        AdminAuthService.from_password("hunter2").authenticate("nope")


def test_unset_or_placeholder_hash_refuses_everything():
    assert AdminAuthService().check_password("anything") is False
    assert AdminAuthService("CHANGE_ME").check_password("CHANGE_ME") is False
