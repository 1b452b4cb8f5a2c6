"""
handlers/server_handler.py
---------------------------
The server overview (one row per bench, bench id in the ``id`` query
parameter), server cards (addressed by PC id) and the category list.
Delegates all logic to ServerService.
"""

from fastapi import APIRouter, Depends, Query

from db.access import Database
from handlers.schemas import ServerBody, ServerCardBody
from security.auth import get_db, require_permission
from services.server_service import ServerService

router = APIRouter(prefix="/api", tags=["servers"])

_can_read = [Depends(require_permission("Read"))]
_can_edit = [Depends(require_permission("Edit"))]


def _service(db: Database = Depends(get_db)) -> ServerService:
    return ServerService(db)


# ── Overview ──────────────────────────────────────────────

@router.get("/servers", dependencies=_can_read)
def list_servers(service: ServerService = Depends(_service)):
    """Every bench joined with its PC and project overview."""
    return {"servers": service.list_servers()}


@router.post("/servers", status_code=201, dependencies=_can_edit)
def create_server(body: ServerBody, service: ServerService = Depends(_service)):
    server = service.create_server(
        body.name, body.platform, body.description, body.bench_type, body.status, body.user
    )
    return {"success": True, "message": "Server added successfully", "server": server}


@router.put("/servers", dependencies=_can_edit)
def update_server(
    body: ServerBody,
    bench_id: int = Query(alias="id"),
    service: ServerService = Depends(_service),
):
    server = service.update_server(
        bench_id, body.name, body.platform, body.description, body.bench_type, body.status, body.user
    )
    return {"success": True, "message": "Server updated successfully", "server": server}


@router.delete("/servers", dependencies=_can_edit)
def delete_server(bench_id: int = Query(alias="id"), service: ServerService = Depends(_service)):
    service.delete_server(bench_id)
    return {"success": True, "message": "Server deleted successfully"}


# ── Cards ─────────────────────────────────────────────────

@router.get("/servers/{pc_id}", dependencies=_can_read)
def get_server_card(pc_id: int, service: ServerService = Depends(_service)):
    return {"server": service.get_card(pc_id)}


@router.put("/servers/{pc_id}", dependencies=_can_edit)
def update_server_card(pc_id: int, body: ServerCardBody, service: ServerService = Depends(_service)):
    card = service.update_card(
        pc_id, body.casual_name, body.platform, body.pc_info_text, body.bench_type, body.user_name
    )
    return {"success": True, "message": "Server (pc) updated successfully", "server": card}


@router.delete("/servers/{pc_id}", dependencies=_can_edit)
def delete_server_card(pc_id: int, service: ServerService = Depends(_service)):
    service.delete_card(pc_id)
    return {"success": True, "message": f"Server (pc) with ID {pc_id} deleted successfully."}


# ── Categories ────────────────────────────────────────────

@router.get("/categories", dependencies=_can_read)
def list_categories(service: ServerService = Depends(_service)):
    """Distinct platforms, used as server categories."""
    return {"categories": service.list_categories()}
