"""Example: use the service layer without Flask.

Controllers are a thin layer; the use cases live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.employee_events.employee_events.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    home = container.home_service.build_home()
    for event in home.upcoming_events:
        print(event.start_datetime, event.description)
    for row in home.top_employees:
        print(row.employee.full_name, row.events_attended)


if __name__ == "__main__":
    main()
