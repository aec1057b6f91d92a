from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_employee_event_repository import MySQLEmployeeEventRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .events.mysql_event_repository import MySQLEventRepository
from .events.service import EventService
from .home.service import HomeService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    events_repo: MySQLEventRepository
    attendance_repo: MySQLEmployeeEventRepository

    employee_service: EmployeeService
    event_service: EventService
    home_service: HomeService


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    employees_repo = MySQLEmployeeRepository(conn)
    events_repo = MySQLEventRepository(conn)
    attendance_repo = MySQLEmployeeEventRepository(conn)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo, attendance_repo),
        event_service=EventService(events_repo, employees_repo, attendance_repo),
        home_service=HomeService(events_repo, employees_repo, attendance_repo),
    )
