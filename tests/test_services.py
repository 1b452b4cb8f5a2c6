"""
Tests for the business logic layer (services/).
Repositories and the Database are replaced with MagicMocks.
"""

import logging
from datetime import date
from unittest.mock import MagicMock, call

import bcrypt
import pytest

from db.errors import ConstraintKind, ConstraintViolation, NotFound
from models.bench import BenchServer, ServerCard
from models.project import Project
from models.software import LicenseAssignment, SoftwareInstallation
from models.user import Permission, User, UserGroup
from services.errors import Conflict, EntityInUse, ValidationError
from services.group_service import GroupService
from services.inventory_service import InventoryService
from services.license_service import LicenseService
from services.server_service import ServerService, card_status
from services.software_service import SoftwareAssignmentService
from services.user_service import UserService, hash_password


def run_inline(tx):
    """Make ``db.transaction(body)`` call ``body(tx)`` directly."""
    return lambda body: body(tx)


# ==================== Inventory ====================

class TestInventoryService:
    @pytest.fixture
    def repo(self):
        return MagicMock()

    @pytest.fixture
    def service(self, repo):
        return InventoryService(repo, "Project", "project_id")

    def test_get_missing_raises_not_found(self, service, repo):
        repo.get_by_id.return_value = None

        with pytest.raises(NotFound, match="Project not found"):
            service.get(7)

    def test_create_ignores_client_supplied_id(self, service, repo):
        repo.add.side_effect = lambda p: Project(p.project_name, p.project_number, 11)

        created = service.create(Project("Alpha", project_id=999))

        assert repo.add.call_args.args[0].project_id is None
        assert created.project_id == 11

    def test_replace_sets_key_from_path(self, service, repo):
        repo.update.return_value = True
        repo.get_by_id.return_value = Project("Beta", project_id=3)

        updated = service.replace(3, Project("Beta"))

        assert repo.update.call_args.args[0].project_id == 3
        assert updated.project_name == "Beta"

    def test_replace_missing_raises_not_found(self, service, repo):
        repo.update.return_value = False

        with pytest.raises(NotFound):
            service.replace(3, Project("Beta"))

    def test_remove_missing_raises_not_found(self, service, repo):
        repo.delete.return_value = False

        with pytest.raises(NotFound):
            service.remove(3)

    def test_remove_referenced_raises_entity_in_use(self, service, repo):
        repo.delete.side_effect = ConstraintViolation(
            "update or delete on table \"projects\" violates foreign key constraint",
            constraint_kind=ConstraintKind.FOREIGN_KEY,
            detail='Key (project_id)=(3) is still referenced from table "test_benches".',
        )

        with pytest.raises(EntityInUse) as exc_info:
            service.remove(3)

        assert "still referenced" in exc_info.value.message
        assert "test_benches" in exc_info.value.detail

    def test_remove_other_constraint_propagates(self, service, repo):
        repo.delete.side_effect = ConstraintViolation("check", constraint_kind=ConstraintKind.CHECK)

        with pytest.raises(ConstraintViolation):
            service.remove(3)


# ==================== Licenses ====================

class TestLicenseService:
    @pytest.fixture
    def db(self):
        return MagicMock()

    @pytest.fixture
    def tx(self):
        tx = MagicMock()
        tx.insert.return_value = 21
        return tx

    @pytest.fixture
    def service(self, db, tx):
        db.transaction.side_effect = run_inline(tx)
        return LicenseService(db)

    @pytest.mark.parametrize("pc_id, vm_id", [(None, None), (1, 2)])
    def test_assign_requires_exactly_one_target(self, service, db, pc_id, vm_id):
        with pytest.raises(ValidationError):
            service.assign(5, pc_id=pc_id, vm_id=vm_id)

        db.transaction.assert_not_called()

    def test_assign_replaces_previous_in_one_transaction(self, service, db, tx):
        db.query_one.return_value = LicenseAssignment(
            license_id=5, pc_id=3, assigned_on=date(2026, 3, 1), assignment_id=21
        )

        assignment = service.assign(5, pc_id=3, assigned_on=date(2026, 3, 1))

        db.transaction.assert_called_once()
        delete_sql, delete_params = tx.update.call_args.args
        assert delete_sql.startswith("DELETE FROM license_assignments")
        assert delete_params == (5,)
        assert tx.insert.call_args.args[1] == (5, 3, None, date(2026, 3, 1))
        assert assignment.assignment_id == 21

    def test_assign_defaults_to_today(self, service, tx):
        service.assign(5, vm_id=8)
        assert tx.insert.call_args.args[1] == (5, None, 8, date.today())

    def test_unassign_without_assignment_is_fine(self, service, db):
        db.update.return_value = 0
        assert service.unassign(5) == 0

    def test_current_assignment_none(self, service, db):
        db.query_one.return_value = None
        assert service.current_assignment(5) is None


# ==================== Software installations ====================

class TestSoftwareAssignmentService:
    def test_installed_on_reads_host_table(self):
        db = MagicMock()
        db.query.return_value = [SoftwareInstallation(host_id=7, software_id=4, software_name="dSPACE")]
        service = SoftwareAssignmentService(db, "vm")

        installed = service.installed_on(7)

        sql, params = db.query.call_args.args
        assert "vm_software" in sql
        assert params == (7,)
        assert installed[0].software_name == "dSPACE"

    def test_assign_returns_updated_list(self):
        db = MagicMock()
        db.query.return_value = [SoftwareInstallation(host_id=2, software_id=4, software_name="CANoe")]
        service = SoftwareAssignmentService(db, "pc")

        installed = service.assign(2, 4, date(2026, 5, 1))

        sql, params = db.update.call_args.args
        assert "pc_software" in sql
        assert params == (2, 4, date(2026, 5, 1))
        assert installed[0].software_name == "CANoe"

    def test_unassign_not_installed_raises_not_found(self):
        db = MagicMock()
        db.update.return_value = 0
        service = SoftwareAssignmentService(db, "vm")

        with pytest.raises(NotFound, match="VM"):
            service.unassign(2, 4)


# ==================== Users ====================

class TestUserService:
    @pytest.fixture
    def service(self):
        service = UserService(MagicMock())
        service.users = MagicMock()
        service.groups = MagicMock()
        service.users.get_by_email.return_value = None
        service.groups.exists.return_value = True
        service.users.add.side_effect = lambda user, password_hash, salt: User(
            user.user_name, user.email, user.company_username, user.user_group_id, "Lab", 10
        )
        return service

    def test_create_hashes_password(self, service):
        user = service.create_user("Ada", "ada@example.com", "correct horse", user_group_id=2)

        _, password_hash, salt = service.users.add.call_args.args
        assert password_hash != "correct horse"
        assert password_hash.startswith(salt)
        assert bcrypt.checkpw(b"correct horse", password_hash.encode())
        assert user.user_id == 10
        assert user.user_group_name == "Lab"

    def test_create_is_logged_once(self, caplog):
        db = MagicMock()
        db.insert.return_value = 10
        db.query_one.side_effect = [None, User("Ada", "ada@example.com", user_id=10)]

        with caplog.at_level(logging.INFO):
            UserService(db).create_user("Ada", "ada@example.com", "correct horse")

        assert len([r for r in caplog.records if "user #10" in r.getMessage()]) == 1

    @pytest.mark.parametrize("email", ["", "ada", "ada@", "ada@example", "a b@example.com"])
    def test_invalid_email(self, service, email):
        with pytest.raises(ValidationError, match="email"):
            service.create_user("Ada", email, "correct horse")

    def test_short_password(self, service):
        with pytest.raises(ValidationError, match="at least 8"):
            service.create_user("Ada", "ada@example.com", "short")

    def test_duplicate_email_conflict(self, service):
        service.users.get_by_email.return_value = User("Other", "ada@example.com", user_id=3)

        with pytest.raises(Conflict):
            service.create_user("Ada", "ada@example.com", "correct horse")

        service.users.add.assert_not_called()

    def test_unique_violation_race_is_conflict(self, service):
        service.users.add.side_effect = ConstraintViolation(
            "duplicate key", constraint_kind=ConstraintKind.UNIQUE
        )

        with pytest.raises(Conflict):
            service.create_user("Ada", "ada@example.com", "correct horse")

    def test_unknown_group_not_found(self, service):
        service.groups.exists.return_value = False

        with pytest.raises(NotFound, match="group"):
            service.create_user("Ada", "ada@example.com", "correct horse", user_group_id=99)

    def test_change_group_unknown_user(self, service):
        service.users.update_group.return_value = False

        with pytest.raises(NotFound, match="User"):
            service.change_group(42, 2)

    def test_change_group_to_none_skips_group_check(self, service):
        service.users.update_group.return_value = True
        service.change_group(42, None)

        service.groups.exists.assert_not_called()
        service.users.update_group.assert_called_once_with(42, None)

    def test_delete_missing(self, service):
        service.users.delete.return_value = False

        with pytest.raises(NotFound):
            service.delete_user(42)


def test_hash_password_uses_fresh_salt():
    first_hash, first_salt = hash_password("s3cret-pass")
    second_hash, second_salt = hash_password("s3cret-pass")
    assert first_salt != second_salt
    assert bcrypt.checkpw(b"s3cret-pass", first_hash.encode())
    assert bcrypt.checkpw(b"s3cret-pass", second_hash.encode())


# ==================== Groups ====================

class TestGroupService:
    @pytest.fixture
    def db(self):
        return MagicMock()

    @pytest.fixture
    def tx(self):
        return MagicMock()

    @pytest.fixture
    def service(self, db, tx):
        db.transaction.side_effect = run_inline(tx)
        return GroupService(db)

    def test_replace_platforms_atomically(self, service, db, tx):
        db.query_one.return_value = UserGroup("Lab", 3, "Edit", [1, 4], 2)

        group = service.replace_platforms(2, [4, 1, 4])

        assert tx.update.call_args_list == [
            call("DELETE FROM group_platform_access WHERE user_group_id = %s;", (2,)),
            call("INSERT INTO group_platform_access (user_group_id, platform_id) VALUES (%s, %s);", (2, 4)),
            call("INSERT INTO group_platform_access (user_group_id, platform_id) VALUES (%s, %s);", (2, 1)),
        ]
        assert group.accessible_platform_ids == [1, 4]

    def test_replace_platforms_unknown_group(self, service, tx):
        tx.query_one.return_value = None

        with pytest.raises(NotFound):
            service.replace_platforms(99, [1])

        tx.update.assert_not_called()

    def test_update_permission_unknown_level(self, service, db):
        db.query_one.return_value = None

        with pytest.raises(ValidationError):
            service.update_permission(2, 77)

    def test_update_permission_unknown_group(self, service, db):
        db.query_one.return_value = Permission(3, "Edit")
        db.update.return_value = 0

        with pytest.raises(NotFound):
            service.update_permission(99, 3)

    def test_create_requires_name(self, service):
        with pytest.raises(ValidationError):
            service.create_group("  ", 1)


# ==================== Servers ====================

@pytest.mark.parametrize(
    "current, user_name, expected",
    [
        ("offline", "Ada", "offline"),
        ("Offline", None, "offline"),
        ("online", "Ada", "in_use"),
        ("in_use", "  ", "online"),
        (None, None, "online"),
    ],
)
def test_card_status(current, user_name, expected):
    assert card_status(current, user_name) == expected


class TestServerService:
    @pytest.fixture
    def db(self):
        return MagicMock()

    @pytest.fixture
    def tx(self):
        return MagicMock()

    @pytest.fixture
    def service(self, db, tx):
        db.transaction.side_effect = run_inline(tx)
        return ServerService(db)

    def test_create_writes_three_tables_in_one_transaction(self, service, db, tx):
        tx.insert.side_effect = [5, 11, 12]
        tx.update.return_value = 0
        db.query_one.return_value = BenchServer(5, "HIL-05", "MLBevo")

        server = service.create_server("HIL-05", "MLBevo", "Rack PC", bench_type="Compact")

        db.transaction.assert_called_once()
        bench_insert, overview_insert, pc_insert = tx.insert.call_args_list
        assert bench_insert.args[1] == ("HIL-05", "Compact", "Compact")
        assert overview_insert.args[1] == (5, "MLBevo")
        assert pc_insert.args[1] == (5, "HIL-05", "Rack PC", "online", None)
        assert server.bench_id == 5

    @pytest.mark.parametrize("name, platform, description", [("", "MEB", "x"), ("HIL", " ", "x"), ("HIL", "MEB", None)])
    def test_create_requires_name_platform_description(self, service, db, name, platform, description):
        with pytest.raises(ValidationError, match="required"):
            service.create_server(name, platform, description)

        db.transaction.assert_not_called()

    def test_create_rejects_unknown_status(self, service, db):
        with pytest.raises(ValidationError, match="Status"):
            service.create_server("HIL-05", "MEB", "Rack PC", status="broken")

        db.transaction.assert_not_called()

    def test_update_unknown_bench(self, service, tx):
        tx.query_one.return_value = None

        with pytest.raises(NotFound, match="Server not found"):
            service.update_server(99, "HIL-05", "MEB", "Rack PC")

        tx.update.assert_not_called()

    def test_update_gives_bench_a_pc_when_missing(self, service, tx):
        tx.query_one.return_value = {"bench_id": 5}
        tx.update.return_value = 0

        service.update_server(5, "HIL-05", "MEB", "Rack PC", status="in_use", user="Ada")

        assert tx.insert.call_args_list[-1].args[1] == (5, "HIL-05", "Rack PC", "in_use", "Ada")

    def test_delete_referenced_server_is_in_use(self, service, db):
        db.transaction.side_effect = ConstraintViolation(
            "violates foreign key constraint", constraint_kind=ConstraintKind.FOREIGN_KEY
        )

        with pytest.raises(EntityInUse):
            service.delete_server(5)

    def test_delete_missing_server(self, service, tx):
        tx.update.return_value = 0

        with pytest.raises(NotFound):
            service.delete_server(5)

    def test_update_card_writes_pc_bench_and_platform(self, service, db, tx):
        tx.query_one.return_value = {"bench_id": 3, "status": "online"}
        tx.update.return_value = 1
        db.query_one.return_value = ServerCard(8, "Rig 8", "MLBevo")

        card = service.update_card(8, "Rig 8", "MLBevo", "Rack PC", bench_type="Compact", user_name="Ada")

        pc_update, bench_update, platform_update = tx.update.call_args_list
        assert pc_update.args[1] == ("Rig 8", "Rig 8", "Rack PC", "in_use", "Ada", 8)
        assert bench_update.args[1] == ("Rig 8", "Compact", 3)
        assert platform_update.args[1] == ("MLBevo", 3)
        tx.insert.assert_not_called()
        assert card.pc_id == 8

    def test_update_card_without_bench_only_touches_pc(self, service, tx):
        tx.query_one.return_value = {"bench_id": None, "status": "offline"}

        service.update_card(8, "Rig 8", "MEB", "Rack PC", user_name="Ada")

        assert tx.update.call_count == 1
        assert tx.update.call_args.args[1][3] == "offline"

    def test_update_card_unknown_pc(self, service, tx):
        tx.query_one.return_value = None

        with pytest.raises(NotFound, match="pc"):
            service.update_card(8, "Rig 8", "MEB", "Rack PC")

    def test_get_card_missing(self, service, db):
        db.query_one.return_value = None

        with pytest.raises(NotFound):
            service.get_card(8)

    def test_delete_card_missing(self, service, db):
        db.update.return_value = 0

        with pytest.raises(NotFound, match="already deleted"):
            service.delete_card(8)
