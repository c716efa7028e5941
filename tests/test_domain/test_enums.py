"""Tests for domain enumerations."""

from __future__ import annotations

from earnstack.domain.enums import (
    ActionRoute,
    SubmissionStatus,
    UserRole,
    WithdrawalStatus,
)


class TestUserRole:
    def test_all_roles_exist(self) -> None:
        assert {r.value for r in UserRole} == {"buyer", "worker", "admin"}

    def test_role_is_str_enum(self) -> None:
        assert isinstance(UserRole.BUYER, str)
        assert UserRole("worker") is UserRole.WORKER


class TestSubmissionStatus:
    def test_all_statuses_exist(self) -> None:
        expected = {"pending", "approved", "rejected"}
        assert {s.value for s in SubmissionStatus} == expected

    def test_status_compares_to_stored_value(self) -> None:
        assert SubmissionStatus.PENDING == "pending"


class TestWithdrawalStatus:
    def test_statuses(self) -> None:
        assert {s.value for s in WithdrawalStatus} == {"pending", "approved"}


class TestActionRoute:
    def test_routes_point_at_dashboard(self) -> None:
        for route in ActionRoute:
            assert route.value.startswith("/dashboard/")

    def test_known_routes(self) -> None:
        assert ActionRoute.BUYER_HOME == "/dashboard/buyer-home"
        assert ActionRoute.WORKER_HOME == "/dashboard/worker-home"
        assert ActionRoute.MY_SUBMISSIONS == "/dashboard/my-submissions"
        assert ActionRoute.WITHDRAWALS == "/dashboard/withdrawals"
