"""Tests for the kpoints command line interface."""

import pytest
from kpoints.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db, clock):
    """Invoke the CLI against the temporary database with a frozen clock."""

    def _invoke(*args, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, *args],
            obj={"clock": clock},
            input=input,
        )

    return _invoke


class TestSend:
    """Tests for the send command."""

    def test_send_points(self, invoke, temp_db, sample_users):
        result = invoke("send", "alice", "bob", "3", "-m", "Thanks for the review!")

        assert result.exit_code == 0
        assert "Sent 3 points to 'bob'" in result.output
        assert "Balance: 17 points, 2 sends left today" in result.output
        assert temp_db.get_user("bob").point_balance == 23

    def test_send_single_point_wording(self, invoke, sample_users):
        result = invoke("send", "alice", "bob", "1pt")

        assert result.exit_code == 0
        assert "Sent 1 point to 'bob'" in result.output

    def test_send_invalid_points(self, invoke, sample_users):
        result = invoke("send", "alice", "bob", "lots")

        assert result.exit_code == 1
        assert "Error: Invalid points" in result.output

    def test_send_out_of_range(self, invoke, temp_db, sample_users):
        result = invoke("send", "alice", "bob", "5")

        assert result.exit_code == 1
        assert "Error: Points must be an integer between 1 and 3" in result.output
        assert temp_db.get_user("alice").point_balance == 20

    def test_send_to_self(self, invoke, sample_users):
        result = invoke("send", "alice", "alice", "1")

        assert result.exit_code == 1
        assert "cannot send points to themselves" in result.output

    def test_send_unknown_receiver(self, invoke, sample_users):
        result = invoke("send", "alice", "ghost", "1")

        assert result.exit_code == 1
        assert "Receiver 'ghost'" in result.output

    def test_send_daily_limit(self, invoke, sample_users):
        for receiver in ("bob", "carol", "boss"):
            assert invoke("send", "alice", receiver, "1").exit_code == 0

        result = invoke("send", "alice", "bob", "1")

        assert result.exit_code == 1
        assert "already sent points 3 times today" in result.output


class TestLookups:
    """Tests for balance, limit and received commands."""

    def test_balance(self, invoke, sample_users):
        result = invoke("balance", "alice")
        assert result.exit_code == 0
        assert "alice: 20 points" in result.output

    def test_balance_unknown_user(self, invoke):
        result = invoke("balance", "ghost")
        assert result.exit_code == 1
        assert "User 'ghost' not found" in result.output

    def test_limit(self, invoke, sample_users):
        invoke("send", "alice", "bob", "1")

        result = invoke("limit", "alice")

        assert result.exit_code == 0
        assert "alice sent 1/3 on 2024-06-14" in result.output

    def test_limit_for_other_day(self, invoke, sample_users):
        invoke("send", "alice", "bob", "1")

        result = invoke("limit", "alice", "--date", "yesterday")

        assert "alice sent 0/3 on 2024-06-13" in result.output

    def test_limit_invalid_date(self, invoke, sample_users):
        result = invoke("limit", "alice", "--date", "whenever")
        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_received(self, invoke, sample_users):
        invoke("send", "alice", "bob", "2")
        invoke("send", "carol", "bob", "3")

        result = invoke("received", "bob")

        assert result.exit_code == 0
        assert "bob received 5 points in 2024-06" in result.output

    def test_received_other_month(self, invoke, sample_users):
        invoke("send", "alice", "bob", "2")

        result = invoke("received", "bob", "--month", "last month")

        assert "bob received 0 points in 2024-05" in result.output


class TestHistory:
    """Tests for the history command."""

    def test_empty_history(self, invoke, sample_users):
        result = invoke("history")
        assert result.exit_code == 0
        assert "No transactions found." in result.output

    def test_history_lists_transactions(self, invoke, sample_users):
        invoke("send", "alice", "bob", "2", "-m", "arigatou")

        result = invoke("history")

        assert result.exit_code == 0
        assert "Found 1 transaction(s):" in result.output
        assert "Sato Alice" in result.output
        assert "Suzuki Bob" in result.output
        assert "2024-06-14 12:00" in result.output
        assert "arigatou" in result.output

    def test_history_for_user(self, invoke, sample_users):
        invoke("send", "alice", "bob", "2")
        invoke("send", "carol", "boss", "1")

        result = invoke("history", "--user", "carol")

        assert "Found 1 transaction(s):" in result.output
        assert "Ito Ken" in result.output

    def test_history_user_conflicts_with_paging(self, invoke, sample_users):
        result = invoke("history", "--user", "alice", "--limit", "5")
        assert result.exit_code == 1
        assert "cannot be combined" in result.output

    def test_history_invalid_limit(self, invoke, sample_users):
        result = invoke("history", "--limit", "0")
        assert result.exit_code == 1
        assert "Limit must be at least 1" in result.output


def test_rankings(invoke, sample_users):
    invoke("send", "alice", "carol", "3")

    result = invoke("rankings")

    assert result.exit_code == 0
    assert "Department rankings:" in result.output
    assert result.output.index("Engineering") < result.output.index("Sales")


class TestUserCommands:
    """Tests for user and department commands."""

    def test_add_user(self, invoke, temp_db):
        result = invoke("user", "add", "u1", "--first", "Hanako", "--last", "Yamada", "--department", "Sales")

        assert result.exit_code == 0
        assert "Created user 'u1' with 20 points" in result.output
        assert temp_db.get_user("u1").department == "Sales"

    def test_add_existing_user_updates(self, invoke, sample_users):
        result = invoke("user", "add", "alice", "--department", "Marketing")

        assert result.exit_code == 0
        assert "Updated user 'alice'" in result.output

    def test_list_users(self, invoke, sample_users):
        result = invoke("user", "list", "--department", "Sales")

        assert result.exit_code == 0
        assert "alice" in result.output
        assert "carol" not in result.output

    def test_list_users_empty(self, invoke):
        result = invoke("user", "list")
        assert "No users found." in result.output

    def test_show_user(self, invoke, sample_users):
        invoke("send", "bob", "alice", "2")

        result = invoke("user", "show", "alice")

        assert result.exit_code == 0
        assert "Balance: 22 points" in result.output
        assert "Sent today: 0/3" in result.output
        assert "Received this month: 2 points" in result.output

    def test_deactivate_user(self, invoke, temp_db, sample_users):
        result = invoke("user", "deactivate", "bob", input="y\n")

        assert result.exit_code == 0
        assert "Deactivated user 'bob'" in result.output
        assert not temp_db.get_user("bob").is_active

    def test_deactivate_cancelled(self, invoke, temp_db, sample_users):
        result = invoke("user", "deactivate", "bob", input="n\n")

        assert "Deactivation cancelled." in result.output
        assert temp_db.get_user("bob").is_active

    def test_department_list(self, invoke):
        invoke("user", "add", "u1", "--department", "Sales")

        result = invoke("department", "list")

        assert result.exit_code == 0
        assert "Sales" in result.output


class TestAdminCommands:
    """Tests for admin commands."""

    def test_non_admin_is_rejected(self, invoke, sample_users):
        result = invoke("admin", "--as", "alice", "stats")

        assert result.exit_code == 1
        assert "Admin access required" in result.output

    def test_unknown_actor_is_rejected(self, invoke, sample_users):
        result = invoke("admin", "--as", "ghost", "reset-quarterly", "--yes")
        assert result.exit_code == 1

    def test_stats(self, invoke, sample_users):
        invoke("send", "alice", "bob", "1")

        result = invoke("admin", "--as", "boss", "stats")

        assert result.exit_code == 0
        assert "Active users: 4" in result.output
        assert "Transactions today: 1" in result.output
        assert "Active departments: 2" in result.output
        assert "Total circulation: 80/1000 points" in result.output

    def test_import(self, invoke, temp_db, sample_users, tmp_path):
        csv_path = tmp_path / "users.csv"
        csv_path.write_text("user_id,first_name,last_name,department\nu9,Hanako,Yamada,Support\n,No,Id,\n")

        result = invoke("admin", "--as", "boss", "import", str(csv_path))

        assert result.exit_code == 0
        assert "Imported: 1 users" in result.output
        assert "Skipped: 1 incomplete rows" in result.output
        assert temp_db.get_user("u9").department == "Support"

    def test_import_bad_header(self, invoke, sample_users, tmp_path):
        csv_path = tmp_path / "users.csv"
        csv_path.write_text("id,name\n1,x\n")

        result = invoke("admin", "--as", "boss", "import", str(csv_path))

        assert result.exit_code == 1
        assert "missing required columns" in result.output

    def test_export_transactions(self, invoke, sample_users, tmp_path):
        invoke("send", "alice", "bob", "1")
        out = tmp_path / "out.csv"

        result = invoke("admin", "--as", "boss", "export-transactions", str(out))

        assert result.exit_code == 0
        assert "Exported 1 transaction(s)" in result.output
        assert out.read_text(encoding="utf-8").startswith("sender_id,")

    def test_export_balances(self, invoke, sample_users, tmp_path):
        out = tmp_path / "balances.csv"

        result = invoke("admin", "--as", "boss", "export-balances", str(out))

        assert result.exit_code == 0
        assert "Exported 4 user balance(s)" in result.output

    def test_reset_quarterly(self, invoke, temp_db, sample_users):
        invoke("send", "alice", "bob", "3")

        result = invoke("admin", "--as", "boss", "reset-quarterly", "--yes")

        assert result.exit_code == 0
        assert "Reset 4 user(s) to 20 points" in result.output
        assert temp_db.get_user("alice").point_balance == 20
        assert temp_db.get_user("bob").point_balance == 20

    def test_reset_quarterly_cancelled(self, invoke, temp_db, sample_users):
        invoke("send", "alice", "bob", "3")

        result = invoke("admin", "--as", "boss", "reset-quarterly", input="n\n")

        assert "Reset cancelled." in result.output
        assert temp_db.get_user("alice").point_balance == 17

    def test_admin_from_environment(self, cli_runner, temp_db, clock, sample_users):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "admin", "stats"],
            obj={"clock": clock},
            env={"KPOINTS_ADMIN_ID": "boss"},
        )
        assert result.exit_code == 0


def test_invalid_configuration(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "rankings"],
        env={"KPOINTS_DAILY_SEND_LIMIT": "many"},
    )
    assert result.exit_code == 1
    assert "KPOINTS_DAILY_SEND_LIMIT must be an integer" in result.output


def test_database_url_option(cli_runner, temp_db, clock, sample_users):
    result = cli_runner.invoke(
        cli,
        ["--database-url", f"sqlite:///{temp_db.database_path}", "balance", "alice"],
        obj={"clock": clock},
    )
    assert result.exit_code == 0
    assert "alice: 20 points" in result.output
