"""Import a JSON export of the old local-storage data.

Usage: python scripts/import_legacy.py export.json

The file is one JSON object with the keys users, classes, makhdoumeen, events,
teams and scores (each a list of records).
"""
from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.sunday_school.sunday_school.container import build_container
from src.sunday_school.sunday_school.database.legacy_import import LegacyImporter


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import legacy local-storage data into MySQL.")
    parser.add_argument("export", type=Path, help="path to the JSON export")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    data = json.loads(args.export.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SystemExit("The export must be a JSON object keyed by collection name")

    c = build_container(db_config=dict(settings.DB_CONFIG))
    report = LegacyImporter(
        users=c.users_repo,
        classes=c.classes_repo,
        children=c.children_repo,
        events=c.events_repo,
        teams=c.teams_repo,
        scores=c.scores_repo,
    ).run(data)

    for kind in ("users", "classes", "children", "events", "teams", "scores"):
        print(f"{kind:>9}: imported={report.imported.get(kind, 0)} skipped={report.skipped.get(kind, 0)}")


if __name__ == "__main__":
    main()
