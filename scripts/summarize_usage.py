"""
Ingest usage spreadsheets from CLI and print the session summary as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from usage_stats.config import get_log_level
from usage_stats.repositories.usage_session_repository import UsageSessionRepository
from usage_stats.schemas.usage_summary import UploadOutcomeResponse, UsageSessionSnapshotResponse
from usage_stats.services.aggregation_service import AggregationService
from usage_stats.services.upload_service import get_usage_upload_service


def _configure_logging(level_name: str) -> None:
    """
    Configure root logging once for the CLI process.
    """

    logging.basicConfig(
        level=getattr(logging, level_name.strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize monthly and daily usage spreadsheets.")
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Spreadsheet files (.xlsx or .csv), ingested in the given order.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Root log level (defaults to LOG_LEVEL or INFO).",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level or get_log_level())

    session = UsageSessionRepository()
    upload_service = get_usage_upload_service()
    aggregation_service = AggregationService()

    outcomes = []
    for path in args.files:
        try:
            data = path.read_bytes()
        except OSError as exc:
            logging.getLogger(__name__).error("Cannot read %s: %s", path, exc)
            return 1
        outcome = upload_service.ingest_file(data=data, file_name=path.name, session=session)
        outcomes.append(UploadOutcomeResponse.from_domain(outcome).model_dump(mode="json"))

    monthly_kpi, daily_stats = aggregation_service.snapshot(session)
    monthly = session.monthly_dataset
    snapshot = UsageSessionSnapshotResponse.from_domain(
        monthly_file_name=session.monthly_file_name,
        monthly_kpi=monthly_kpi,
        menu_labels=monthly.menu_labels.as_dict() if monthly is not None else None,
        daily_stats=daily_stats,
    )

    payload = {
        "outcomes": outcomes,
        "snapshot": snapshot.model_dump(mode="json"),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0 if any(item["status"] == "success" for item in outcomes) else 1


if __name__ == "__main__":
    raise SystemExit(main())
