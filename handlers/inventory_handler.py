"""
handlers/inventory_handler.py
------------------------------
CRUD routes for every inventory entity. Each resource gets the same five
routes, built from an ``InventoryResource`` description:

    GET    /api/<path>          list          (Read)
    POST   /api/<path>          create        (Edit)
    GET    /api/<path>/{id}     fetch one     (Read)
    PUT    /api/<path>/{id}     full replace  (Edit)
    DELETE /api/<path>/{id}     delete        (Edit)
"""

from dataclasses import dataclass
from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from db.access import Database
from handlers import schemas
from models.bench import HardwareInstallation, HilOperation, HilTechnology, ProjectOverview, TestBench
from models.machine import ModelStand, Pc, VmInstance, Wetbench
from models.project import Project
from models.software import License, Software
from repositories.bench_detail_repo import (
    HardwareRepository,
    HilOperationRepository,
    HilTechnologyRepository,
    ProjectOverviewRepository,
)
from repositories.license_repo import LicenseRepository
from repositories.machine_repo import ModelStandRepository, PcRepository, VmRepository, WetbenchRepository
from repositories.project_repo import ProjectRepository
from repositories.software_repo import SoftwareRepository
from repositories.testbench_repo import TestBenchRepository
from security.auth import get_db, require_permission
from services.inventory_service import InventoryService


@dataclass(frozen=True)
class InventoryResource:
    """How one table is exposed over HTTP."""
    path: str
    label: str
    singular: str
    plural: str
    key: str
    repository: Callable[[Database], object]
    record: type
    body: type[BaseModel]


RESOURCES = (
    InventoryResource("projects", "Project", "project", "projects", "project_id",
                      ProjectRepository, Project, schemas.ProjectBody),
    InventoryResource("testbenches", "Test bench", "testbench", "testbenches", "bench_id",
                      TestBenchRepository, TestBench, schemas.TestBenchBody),
    InventoryResource("projectoverview", "Project overview", "overview", "overviews", "overview_id",
                      ProjectOverviewRepository, ProjectOverview, schemas.ProjectOverviewBody),
    InventoryResource("hiltechnology", "HIL technology", "technology", "technologies", "tech_id",
                      HilTechnologyRepository, HilTechnology, schemas.HilTechnologyBody),
    InventoryResource("hiloperation", "HIL operation", "operation", "operations", "operation_id",
                      HilOperationRepository, HilOperation, schemas.HilOperationBody),
    InventoryResource("hardware", "Hardware installation", "hardware", "hardware", "install_id",
                      HardwareRepository, HardwareInstallation, schemas.HardwareBody),
    InventoryResource("pcs", "PC", "pc", "pcs", "pc_id",
                      PcRepository, Pc, schemas.PcBody),
    InventoryResource("vms", "VM", "vm", "vms", "vm_id",
                      VmRepository, VmInstance, schemas.VmBody),
    InventoryResource("wetbenches", "Wetbench", "wetbench", "wetbenches", "wetbench_id",
                      WetbenchRepository, Wetbench, schemas.WetbenchBody),
    InventoryResource("modelstands", "Model stand", "modelstand", "modelstands", "model_id",
                      ModelStandRepository, ModelStand, schemas.ModelStandBody),
    InventoryResource("software", "Software", "software", "software", "software_id",
                      SoftwareRepository, Software, schemas.SoftwareBody),
    InventoryResource("licenses", "License", "license", "licenses", "license_id",
                      LicenseRepository, License, schemas.LicenseBody),
)


def build_inventory_router(resource: InventoryResource) -> APIRouter:
    """Create the five CRUD routes for one resource."""
    router = APIRouter(prefix=f"/api/{resource.path}", tags=[resource.plural])
    can_read = [Depends(require_permission("Read"))]
    can_edit = [Depends(require_permission("Edit"))]
    BodyModel = resource.body

    def get_service(db: Database = Depends(get_db)) -> InventoryService:
        return InventoryService(resource.repository(db), resource.label, resource.key)

    @router.get("", dependencies=can_read)
    def list_items(service: InventoryService = Depends(get_service)):
        return {resource.plural: service.list_all()}

    @router.post("", status_code=201, dependencies=can_edit)
    def create_item(body: BodyModel, service: InventoryService = Depends(get_service)):
        created = service.create(resource.record(**body.model_dump()))
        return {
            "success": True,
            "message": f"{resource.label} created successfully",
            resource.singular: created,
        }

    @router.get("/{item_id}", dependencies=can_read)
    def get_item(item_id: int, service: InventoryService = Depends(get_service)):
        return {resource.singular: service.get(item_id)}

    @router.put("/{item_id}", dependencies=can_edit)
    def replace_item(item_id: int, body: BodyModel, service: InventoryService = Depends(get_service)):
        updated = service.replace(item_id, resource.record(**body.model_dump()))
        return {
            "success": True,
            "message": f"{resource.label} updated successfully",
            resource.singular: updated,
        }

    @router.delete("/{item_id}", dependencies=can_edit)
    def delete_item(item_id: int, service: InventoryService = Depends(get_service)):
        service.remove(item_id)
        return {"success": True, "message": f"{resource.label} deleted successfully"}

    return router


routers = [build_inventory_router(r) for r in RESOURCES]
