"""Example: use the service layer directly (no Flask).

Prints the live attendance overview, then what a dry-run sync would change.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.insight_edu.insight_edu.container import build_container
from src.insight_edu.insight_edu.database.connection import DatabaseConnection, DBConfig
from src.insight_edu.insight_edu.reconciliation.report import render_summary


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    with DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG)) as conn:
        container = build_container(conn=conn, max_workers=1)
        print(container.dashboard_service.overview())
        print("\n".join(render_summary(container.sync_service.run(dry_run=True))))


if __name__ == "__main__":
    main()
