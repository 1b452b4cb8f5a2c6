"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist and
seeds the fixed permission levels.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.access import Database, Transaction
from utils.logger import get_logger

logger = get_logger(__name__)

PERMISSION_LEVELS = ("Default", "Read", "Edit", "Admin")

SCHEMA_SQL = """
-- Access control: permission levels, groups, platforms
CREATE TABLE IF NOT EXISTS permissions (
    permission_id       INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    permission_name     VARCHAR(50) UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS user_groups (
    user_group_id       INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    user_group_name     VARCHAR(100) UNIQUE NOT NULL,
    permission_id       INT NOT NULL REFERENCES permissions(permission_id)
);

CREATE TABLE IF NOT EXISTS platforms (
    platform_id         INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    platform_name       VARCHAR(100) UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS group_platform_access (
    user_group_id       INT NOT NULL REFERENCES user_groups(user_group_id) ON DELETE CASCADE,
    platform_id         INT NOT NULL REFERENCES platforms(platform_id),
    PRIMARY KEY (user_group_id, platform_id)
);

-- Users: a user belongs to at most one group
CREATE TABLE IF NOT EXISTS users (
    user_id             INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    user_name           VARCHAR(100) NOT NULL,
    company_username    VARCHAR(100),
    email               VARCHAR(255) UNIQUE NOT NULL,
    password_hash       VARCHAR(255) NOT NULL,
    salt                VARCHAR(255) NOT NULL,
    user_group_id       INT REFERENCES user_groups(user_group_id)
);

CREATE TABLE IF NOT EXISTS projects (
    project_id          INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    project_number      VARCHAR(50),
    project_name        VARCHAR(255) NOT NULL
);

-- Test benches and the per-bench detail tables
CREATE TABLE IF NOT EXISTS test_benches (
    bench_id            INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    hil_name            VARCHAR(100) NOT NULL,
    pp_number           VARCHAR(50),
    system_type         VARCHAR(50),
    bench_type          VARCHAR(50),
    acquisition_date    DATE,
    usage_period        VARCHAR(50),
    user_id             INT REFERENCES users(user_id),
    project_id          INT REFERENCES projects(project_id),
    location            VARCHAR(100),
    inventory_number    VARCHAR(50),
    eplan               VARCHAR(100)
);

CREATE TABLE IF NOT EXISTS test_bench_project_overview (
    overview_id         INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    bench_id            INT NOT NULL REFERENCES test_benches(bench_id),
    platform            VARCHAR(100),
    system_supplier     VARCHAR(100),
    wetbench_info       TEXT,
    actuator_info       TEXT,
    hardware            TEXT,
    software            TEXT,
    model_version       VARCHAR(100),
    ticket_notes        TEXT
);

CREATE TABLE IF NOT EXISTS hil_technology (
    tech_id             INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    bench_id            INT NOT NULL REFERENCES test_benches(bench_id),
    fiu_info            TEXT,
    io_info             TEXT,
    can_interface       TEXT,
    power_interface     TEXT,
    possible_tests      TEXT,
    leakage_module      TEXT
);

CREATE TABLE IF NOT EXISTS hil_operation (
    operation_id        INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    bench_id            INT NOT NULL REFERENCES test_benches(bench_id),
    possible_tests      TEXT,
    vehicle_datasets    TEXT,
    scenarios           TEXT,
    controldesk_projects TEXT
);

CREATE TABLE IF NOT EXISTS hardware_installation (
    install_id          INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    bench_id            INT NOT NULL REFERENCES test_benches(bench_id),
    ecu_info            TEXT,
    sensors             TEXT,
    additional_periphery TEXT
);

-- Machines
CREATE TABLE IF NOT EXISTS pc_overview (
    pc_id               INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    bench_id            INT REFERENCES test_benches(bench_id),
    pc_name             VARCHAR(100),
    casual_name         VARCHAR(100),
    purchase_year       INT,
    inventory_number    VARCHAR(50),
    pc_role             VARCHAR(100),
    pc_model            VARCHAR(100),
    special_equipment   TEXT,
    mac_address         VARCHAR(50),
    ip_address          VARCHAR(50),
    pc_info_text        TEXT,
    status              VARCHAR(20),
    active_user         VARCHAR(100)
);

CREATE TABLE IF NOT EXISTS vm_instances (
    vm_id               INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    vm_name             VARCHAR(100) NOT NULL,
    vm_address          VARCHAR(100)
);

CREATE TABLE IF NOT EXISTS wetbenches (
    wetbench_id         INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    wetbench_name       VARCHAR(100) NOT NULL,
    pp_number           VARCHAR(50),
    owner               VARCHAR(100),
    system_type         VARCHAR(50),
    platform            VARCHAR(100),
    system_supplier     VARCHAR(100),
    linked_bench_id     INT REFERENCES test_benches(bench_id),
    actuator_info       TEXT,
    hardware_components TEXT,
    inventory_number    VARCHAR(50)
);

CREATE TABLE IF NOT EXISTS model_stands (
    model_id            INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    model_name          VARCHAR(100) NOT NULL,
    svn_link            VARCHAR(255),
    features            TEXT
);

-- Software, installations and licenses
CREATE TABLE IF NOT EXISTS software (
    software_id         INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    software_name       VARCHAR(100) NOT NULL,
    major_version       VARCHAR(50),
    vendor              VARCHAR(100)
);

CREATE TABLE IF NOT EXISTS pc_software (
    pc_id               INT NOT NULL REFERENCES pc_overview(pc_id),
    software_id         INT NOT NULL REFERENCES software(software_id),
    install_date        DATE,
    PRIMARY KEY (pc_id, software_id)
);

CREATE TABLE IF NOT EXISTS vm_software (
    vm_id               INT NOT NULL REFERENCES vm_instances(vm_id),
    software_id         INT NOT NULL REFERENCES software(software_id),
    install_date        DATE,
    PRIMARY KEY (vm_id, software_id)
);

CREATE TABLE IF NOT EXISTS licenses (
    license_id          INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    software_id         INT NOT NULL REFERENCES software(software_id),
    license_name        VARCHAR(100),
    license_description TEXT,
    license_number      VARCHAR(100),
    dongle_number       VARCHAR(100),
    activation_key      VARCHAR(255),
    system_id           VARCHAR(100),
    license_user        VARCHAR(100),
    maintenance_end     DATE,
    owner               VARCHAR(100),
    license_type        VARCHAR(50),
    remarks             TEXT
);

-- A license is assigned to exactly one PC or exactly one VM
CREATE TABLE IF NOT EXISTS license_assignments (
    assignment_id       INT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    license_id          INT UNIQUE NOT NULL REFERENCES licenses(license_id),
    pc_id               INT REFERENCES pc_overview(pc_id),
    vm_id               INT REFERENCES vm_instances(vm_id),
    assigned_on         DATE,
    CONSTRAINT license_assignment_one_target CHECK ((pc_id IS NULL) <> (vm_id IS NULL))
);

CREATE INDEX IF NOT EXISTS idx_pc_overview_bench ON pc_overview(bench_id);
CREATE INDEX IF NOT EXISTS idx_license_assignments_pc ON license_assignments(pc_id);
CREATE INDEX IF NOT EXISTS idx_license_assignments_vm ON license_assignments(vm_id);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL and seed the permission levels.
    Safe to call multiple times (uses IF NOT EXISTS / ON CONFLICT).
    """

    def apply(tx: Transaction) -> None:
        tx.update(SCHEMA_SQL)
        for name in PERMISSION_LEVELS:
            tx.update(
                "INSERT INTO permissions (permission_name) VALUES (%s) "
                "ON CONFLICT (permission_name) DO NOTHING;",
                (name,),
            )

    db.transaction(apply)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from config import DATABASE_URL
    from db.connection import ConnectionPool

    with ConnectionPool(DATABASE_URL) as pool:
        create_tables(Database(pool))
    print("Database schema created successfully.")
