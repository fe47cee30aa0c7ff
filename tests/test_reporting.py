"""Tests for reporting domain service."""

from datetime import date, datetime, UTC

import pytest

from kpoints.domain.errors import NotFoundError


def _by_name(rankings):
    return {r.name: r for r in rankings}


class TestDepartmentRankings:
    """Tests for department rankings."""

    def test_rankings_order_by_total_points(self, reporting, ledger, sample_users):
        ledger.transfer("alice", "carol", 3)

        rankings = reporting.department_rankings()

        assert [r.name for r in rankings] == ["Engineering", "Sales"]
        assert rankings[0].total_points == 43
        assert rankings[0].member_count == 2
        assert rankings[1].total_points == 37
        assert rankings[1].member_count == 2

    def test_ties_are_broken_by_name(self, reporting, sample_users):
        rankings = reporting.department_rankings()

        assert [r.name for r in rankings] == ["Engineering", "Sales"]
        assert rankings[0].total_points == rankings[1].total_points == 40

    def test_inactive_users_are_excluded(self, reporting, temp_db, sample_users):
        temp_db.set_user_active("carol", False)

        rankings = _by_name(reporting.department_rankings())

        assert rankings["Engineering"].total_points == 20
        assert rankings["Engineering"].member_count == 1

    def test_department_with_only_inactive_users_disappears(self, reporting, temp_db, sample_users):
        temp_db.set_user_active("alice", False)
        temp_db.set_user_active("bob", False)

        assert [r.name for r in reporting.department_rankings()] == ["Engineering"]

    def test_empty_directory(self, reporting):
        assert reporting.department_rankings() == []


class TestMonthlyReceived:
    """Tests for monthly received totals."""

    def test_sums_points_received_this_month(self, reporting, ledger, sample_users):
        ledger.transfer("alice", "bob", 2)
        ledger.transfer("carol", "bob", 3)
        ledger.transfer("bob", "alice", 1)

        assert reporting.monthly_received("bob") == 5
        assert reporting.monthly_received("alice") == 1
        assert reporting.monthly_received("carol") == 0

    def test_month_boundary_uses_reference_timezone(self, reporting, ledger, clock, sample_users):
        # 2024-06-30 14:30 UTC is 23:30 on June 30 in Tokyo
        clock.moment = datetime(2024, 6, 30, 14, 30, tzinfo=UTC)
        ledger.transfer("alice", "bob", 2)
        # 2024-06-30 15:30 UTC is already July 1 in Tokyo
        clock.moment = datetime(2024, 6, 30, 15, 30, tzinfo=UTC)
        ledger.transfer("carol", "bob", 3)

        assert reporting.monthly_received("bob", date(2024, 6, 1)) == 2
        assert reporting.monthly_received("bob", date(2024, 7, 1)) == 3
        assert reporting.monthly_received("bob") == 3

    def test_any_day_selects_its_month(self, reporting, ledger, sample_users):
        ledger.transfer("alice", "bob", 2)
        assert reporting.monthly_received("bob", date(2024, 6, 28)) == 2
        assert reporting.monthly_received("bob", date(2024, 5, 14)) == 0

    def test_unknown_user(self, reporting):
        with pytest.raises(NotFoundError):
            reporting.monthly_received("ghost")


class TestSystemStats:
    """Tests for system statistics."""

    def test_stats(self, reporting, ledger, temp_db, clock, sample_users):
        ledger.transfer("alice", "bob", 1)
        clock.advance(days=1)
        ledger.transfer("alice", "bob", 1)
        ledger.transfer("bob", "carol", 2)
        temp_db.create_user("gone", first_name="Go", last_name="Ne", department="Legal", point_balance=5)
        temp_db.set_user_active("gone", False)

        stats = reporting.system_stats()

        assert stats.total_users == 4
        assert stats.today_transactions == 2
        assert stats.active_departments == 2
        assert stats.total_circulation == 80

    def test_empty_system(self, reporting):
        stats = reporting.system_stats()
        assert stats.total_users == 0
        assert stats.today_transactions == 0
        assert stats.active_departments == 0
        assert stats.total_circulation == 0

    def test_total_circulation(self, reporting, full_circulation):
        assert reporting.total_circulation() == 1000


def test_users_with_stats(reporting, ledger, temp_db, sample_users):
    ledger.transfer("alice", "bob", 3)
    ledger.transfer("carol", "bob", 1)
    temp_db.set_user_active("boss", False)

    entries = {entry.user.id: entry for entry in reporting.users_with_stats()}

    assert set(entries) == {"alice", "bob", "carol"}
    assert entries["alice"].daily_sent_count == 1
    assert entries["alice"].user.point_balance == 17
    assert entries["bob"].monthly_received == 4
    assert entries["bob"].daily_sent_count == 0
