"""
Tests for the HTTP API (handlers/, security/auth.py, main.py).

Services are patched where the handlers look them up; the permission
context is overridden per test through the ``as_level`` fixture.
"""

import logging
from datetime import date
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from fastapi.testclient import TestClient
from psycopg2 import errors as pg_errors

from db.access import Database
from db.errors import (
    ConstraintKind,
    ConstraintViolation,
    InsertError,
    NotFound,
    TransportError,
)
from main import create_app
from models.bench import BenchServer, ServerCard
from models.project import Project
from models.software import LicenseAssignment, SoftwareInstallation
from models.user import User, UserGroup
from security.auth import get_permission_context
from security.permissions import PermissionContext
from services.errors import Conflict, EntityInUse, ValidationError


@pytest.fixture
def inventory():
    """The InventoryService instance every inventory route will receive."""
    service = MagicMock()
    with patch("handlers.inventory_handler.InventoryService", return_value=service):
        yield service


# ==================== Inventory routes ====================

class TestInventoryRoutes:
    def test_list(self, client, inventory):
        inventory.list_all.return_value = [Project("Alpha", "P-1", 1)]

        response = client.get("/api/projects")

        assert response.status_code == 200
        assert response.json() == {
            "projects": [{"project_name": "Alpha", "project_number": "P-1", "project_id": 1}]
        }

    def test_get_one(self, client, inventory):
        inventory.get.return_value = Project("Alpha", project_id=1)

        response = client.get("/api/projects/1")

        assert response.status_code == 200
        assert response.json()["project"]["project_name"] == "Alpha"
        inventory.get.assert_called_once_with(1)

    def test_create(self, client, inventory):
        inventory.create.side_effect = lambda p: Project(p.project_name, p.project_number, 5)

        response = client.post("/api/projects", json={"project_name": "Alpha", "project_number": "P-1"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["project"]["project_id"] == 5

    def test_create_missing_required_field(self, client, inventory):
        response = client.post("/api/projects", json={"project_number": "P-1"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
        assert "project_name" in response.json()["details"]
        inventory.create.assert_not_called()

    def test_replace_is_full_row(self, client, inventory):
        inventory.replace.side_effect = lambda item_id, p: p

        response = client.put("/api/projects/3", json={"project_name": "Beta"})

        assert response.status_code == 200
        item_id, record = inventory.replace.call_args.args
        assert item_id == 3
        assert record.project_number is None

    def test_delete(self, client, inventory):
        response = client.delete("/api/pcs/4")

        assert response.status_code == 200
        assert response.json()["success"] is True
        inventory.remove.assert_called_once_with(4)

    def test_dates_are_parsed(self, client, inventory):
        inventory.create.side_effect = lambda lic: lic

        response = client.post("/api/licenses", json={"software_id": 2, "maintenance_end": "2027-06-30"})

        assert response.status_code == 201
        assert inventory.create.call_args.args[0].maintenance_end == date(2027, 6, 30)


# ==================== Error mapping ====================

class TestErrorMapping:
    @pytest.mark.parametrize(
        "error, status",
        [
            (NotFound("Project not found"), 404),
            (EntityInUse("still referenced by other records"), 409),
            (Conflict("already exists"), 409),
            (ValidationError("bad input"), 400),
            (ConstraintViolation("dup", constraint_kind=ConstraintKind.UNIQUE), 409),
            (ConstraintViolation("fk", constraint_kind=ConstraintKind.FOREIGN_KEY), 400),
            (ConstraintViolation("nn", constraint_kind=ConstraintKind.NOT_NULL), 400),
            (ConstraintViolation("ck", constraint_kind=ConstraintKind.CHECK), 400),
            (InsertError("no id"), 500),
            (TransportError("connection refused"), 500),
        ],
    )
    def test_status(self, client, inventory, error, status):
        inventory.remove.side_effect = error

        response = client.delete("/api/projects/1")

        assert response.status_code == status
        assert set(response.json()) == {"error", "details"}

    def test_not_found_message(self, client, inventory):
        inventory.get.side_effect = NotFound("Project not found")
        assert client.get("/api/projects/9").json()["error"] == "Project not found"


# ==================== Permissions ====================

class TestPermissionGate:
    def test_missing_identity_is_401(self, app):
        response = TestClient(app).get("/api/projects")
        assert response.status_code == 401

    def test_malformed_identity_is_401(self, app):
        response = TestClient(app).get("/api/projects", headers={"X-User-Id": "abc"})
        assert response.status_code == 401

    def test_identity_header_resolves_permissions(self, app, mock_db, inventory):
        inventory.list_all.return_value = []
        with patch(
            "security.auth.get_user_permissions",
            return_value=PermissionContext(user_id=7, permission_name="Read"),
        ) as resolve:
            response = TestClient(app).get("/api/projects", headers={"X-User-Id": "7"})

        assert response.status_code == 200
        resolve.assert_called_once_with(mock_db, 7)

    def test_read_cannot_write(self, app, as_level, inventory):
        as_level("Read")
        client = TestClient(app)

        assert client.get("/api/projects").status_code == 200
        response = client.post("/api/projects", json={"project_name": "Alpha"})
        assert response.status_code == 403
        assert "Edit" in response.json()["error"]
        inventory.create.assert_not_called()

    def test_default_cannot_read(self, app, as_level, inventory):
        as_level("Default")
        assert TestClient(app).get("/api/projects").status_code == 403

    def test_edit_cannot_administer(self, app, as_level):
        as_level("Edit")
        assert TestClient(app).get("/api/admin/users").status_code == 403

    def test_own_permission_needs_identity_only(self, app, as_level):
        as_level("Default", platforms=[2])

        response = TestClient(app).get("/api/auth/permission")

        assert response.status_code == 200
        assert response.json() == {
            "user_id": 1, "permission_name": "Default", "accessible_platform_ids": [2]
        }


# ==================== Assignments ====================

class TestAssignmentRoutes:
    def test_assign_license(self, client):
        assignment = LicenseAssignment(license_id=5, pc_id=3, assigned_on=date(2026, 3, 1), assignment_id=9)
        with patch("handlers.license_handler.LicenseService") as service_cls:
            service_cls.return_value.assign.return_value = assignment
            response = client.post("/api/licenses/5/assignment", json={"pc_id": 3, "assigned_on": "2026-03-01"})

        assert response.status_code == 201
        assert response.json()["assignment"]["assignment_id"] == 9
        service_cls.return_value.assign.assert_called_once_with(5, 3, None, date(2026, 3, 1))

    def test_unassigned_license_returns_null(self, client):
        with patch("handlers.license_handler.LicenseService") as service_cls:
            service_cls.return_value.current_assignment.return_value = None
            response = client.get("/api/licenses/5/assignment")

        assert response.json() == {"assignment": None}

    def test_list_pc_software(self, client):
        with patch("handlers.software_handler.SoftwareAssignmentService") as service_cls:
            service_cls.return_value.installed_on.return_value = [
                SoftwareInstallation(host_id=2, software_id=4, software_name="CANoe")
            ]
            response = client.get("/api/pcs/2/software")

        assert response.status_code == 200
        assert response.json()["software"][0]["software_name"] == "CANoe"
        service_cls.return_value.installed_on.assert_called_once_with(2)

    def test_uninstall_missing_software_is_404(self, client):
        with patch("handlers.software_handler.SoftwareAssignmentService") as service_cls:
            service_cls.return_value.unassign.side_effect = NotFound("Software is not installed on this PC")
            response = client.delete("/api/pcs/2/software/4")

        assert response.status_code == 404
        service_cls.assert_called_once()
        assert service_cls.call_args.args[1] == "pc"


# ==================== Admin ====================

class TestAdminRoutes:
    def test_create_user(self, client):
        with patch("handlers.admin_handler.UserService") as service_cls:
            service_cls.return_value.create_user.return_value = User(
                "Ada", "ada@example.com", user_group_id=2, user_group_name="Lab", user_id=10
            )
            response = client.post(
                "/api/admin/users",
                json={"user_name": "Ada", "email": "ada@example.com", "password": "correct horse", "user_group_id": 2},
            )

        assert response.status_code == 201
        assert response.json()["user"]["user_id"] == 10
        assert "password" not in response.json()["user"]

    def test_replace_group_platforms(self, client):
        with patch("handlers.admin_handler.GroupService") as service_cls:
            service_cls.return_value.replace_platforms.return_value = UserGroup("Lab", 3, "Edit", [1, 4], 2)
            response = client.put("/api/admin/groups/2/platforms", json={"platform_ids": [1, 4]})

        assert response.status_code == 200
        assert response.json()["group"]["accessible_platform_ids"] == [1, 4]
        service_cls.return_value.replace_platforms.assert_called_once_with(2, [1, 4])


# ==================== Servers ====================

@pytest.fixture
def servers():
    """The ServerService instance every server route will receive."""
    service = MagicMock()
    with patch("handlers.server_handler.ServerService", return_value=service):
        yield service


class TestServerRoutes:
    def test_create_server(self, client, servers):
        servers.create_server.return_value = BenchServer(5, "HIL-05", "MLBevo", status="online")

        response = client.post(
            "/api/servers", json={"name": "HIL-05", "platform": "MLBevo", "description": "Rack PC"}
        )

        assert response.status_code == 201
        assert response.json()["server"]["bench_id"] == 5
        servers.create_server.assert_called_once_with("HIL-05", "MLBevo", "Rack PC", None, None, None)

    def test_create_server_missing_platform(self, client, servers):
        response = client.post("/api/servers", json={"name": "HIL-05", "description": "Rack PC"})

        assert response.status_code == 400
        servers.create_server.assert_not_called()

    def test_update_server_takes_bench_id_from_query(self, client, servers):
        servers.update_server.return_value = BenchServer(5, "HIL-05")

        response = client.put(
            "/api/servers?id=5",
            json={"name": "HIL-05", "platform": "MEB", "description": "Rack PC", "user": "Ada"},
        )

        assert response.status_code == 200
        assert servers.update_server.call_args.args == (5, "HIL-05", "MEB", "Rack PC", None, None, "Ada")

    def test_update_server_requires_id(self, client, servers):
        response = client.put("/api/servers", json={"name": "HIL-05", "platform": "MEB", "description": "x"})

        assert response.status_code == 400
        servers.update_server.assert_not_called()

    def test_delete_server(self, client, servers):
        response = client.delete("/api/servers?id=5")

        assert response.json()["success"] is True
        servers.delete_server.assert_called_once_with(5)

    def test_get_card(self, client, servers):
        servers.get_card.return_value = ServerCard(8, "Rig 8", "MEB", status="online")

        response = client.get("/api/servers/8")

        assert response.json()["server"]["casual_name"] == "Rig 8"
        servers.get_card.assert_called_once_with(8)

    def test_update_card(self, client, servers):
        servers.update_card.return_value = ServerCard(8, "Rig 8", "MEB", status="in_use", user_name="Ada")

        response = client.put(
            "/api/servers/8",
            json={"casual_name": "Rig 8", "platform": "MEB", "pc_info_text": "Rack PC", "user_name": "Ada"},
        )

        assert response.status_code == 200
        assert response.json()["server"]["status"] == "in_use"
        servers.update_card.assert_called_once_with(8, "Rig 8", "MEB", "Rack PC", None, "Ada")

    def test_delete_missing_card_is_404(self, client, servers):
        servers.delete_card.side_effect = NotFound("Server (pc) not found or already deleted")

        response = client.delete("/api/servers/8")

        assert response.status_code == 404
        assert response.json()["error"] == "Server (pc) not found or already deleted"

    def test_categories(self, client, servers):
        servers.list_categories.return_value = ["MEB", "MLBevo"]

        assert client.get("/api/categories").json() == {"categories": ["MEB", "MLBevo"]}

    def test_read_cannot_create(self, app, as_level, servers):
        servers.list_servers.return_value = []
        as_level("Read")
        client = TestClient(app)

        assert client.get("/api/servers").status_code == 200
        assert client.post(
            "/api/servers", json={"name": "HIL-05", "platform": "MEB", "description": "x"}
        ).status_code == 403
        servers.create_server.assert_not_called()


# ==================== Lookups & health ====================

class TestLookups:
    def test_bench_types(self, client, mock_db):
        mock_db.query.return_value = [{"bench_type": "Compact"}, {"bench_type": "Fullsize"}]

        response = client.get("/api/bench-types")

        assert response.json() == {"bench_types": ["Compact", "Fullsize"]}


class TestHealth:
    def test_healthy(self, client, mock_db):
        mock_db.query_one.return_value = {"ok": 1}
        assert client.get("/health").json()["status"] == "ok"

    def test_database_down(self, client, mock_db):
        mock_db.query_one.side_effect = TransportError("connection refused")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


# ==================== Logging ====================

class TestErrorLogging:
    """A failed statement is logged once, by the access layer, not again per request."""

    @pytest.fixture
    def live_client(self, fake_pool):
        app = create_app(Database(fake_pool))
        app.dependency_overrides[get_permission_context] = lambda: PermissionContext(
            user_id=1, permission_name="Admin"
        )
        return TestClient(app)

    def test_transport_failure_logged_once(self, live_client, fake_conn, caplog):
        fake_conn.outcomes = [{"error": psycopg2.OperationalError("server closed the connection")}]

        with caplog.at_level(logging.INFO):
            response = live_client.get("/api/projects")

        assert response.status_code == 500
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1

    def test_constraint_violation_is_not_an_error_log(self, live_client, fake_conn, caplog):
        fake_conn.outcomes = [{"error": pg_errors.UniqueViolation("duplicate key value")}]

        with caplog.at_level(logging.INFO):
            response = live_client.post("/api/projects", json={"project_name": "Alpha"})

        assert response.status_code == 409
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len([r for r in caplog.records if r.levelno == logging.WARNING and "unique" in r.getMessage()]) == 1
