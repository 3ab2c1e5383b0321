"""
usage_stats/services/upload_service.py

Service layer for the upload workflow.

One upload runs to completion before the next is accepted:

    1. decode bytes into a grid          (ingest_file only)
    2. reject grids with fewer than 2 rows
    3. classify the grid as monthly / daily / unknown
    4. parse with the matching parser
    5. apply the dataset to the session

Known failures never raise out of this service. They come back as an
``UploadOutcome`` with ``status="failed"`` and a code from
``usage_stats.failure_codes``, and the session is left untouched.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from functools import lru_cache

from usage_stats.config import get_usage_ingestion_settings
from usage_stats.domain.errors import EmptyGridError, UnclassifiableFormatError, UsageIngestionError
from usage_stats.domain.usage_dataset import DailyDataset, FileKind, RawGrid, SkippedRow
from usage_stats.failure_codes import CLASSIFIED_DAILY, CLASSIFIED_MONTHLY, OUTCOME_MESSAGES
from usage_stats.mappers.daily_table_parser import DailyTableParser
from usage_stats.mappers.monthly_table_parser import MonthlyTableParser
from usage_stats.readers.grid_reader import GridReader
from usage_stats.repositories.usage_session_repository import UsageSessionRepository
from usage_stats.validators.format_classifier import FormatClassifier

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class UploadOutcome:
    """
    User-facing result of one upload.

    ``rows_skipped`` is non-zero when some rows were dropped even though the
    upload succeeded.
    """

    file_name: str
    status: str
    code: str
    message: str
    file_kind: FileKind = FileKind.UNKNOWN
    dataset_id: str | None = None
    rows_accepted: int = 0
    rows_skipped: int = 0
    skipped_rows: tuple[SkippedRow, ...] = field(default_factory=tuple)
    detail: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS


def new_dataset_id() -> str:
    """Opaque identifier for a daily dataset."""
    return uuid.uuid4().hex


class UsageUploadService:
    """
    Coordinates classification, parsing and session updates.
    """

    def __init__(
        self,
        *,
        classifier: FormatClassifier | None = None,
        monthly_parser: MonthlyTableParser | None = None,
        daily_parser: DailyTableParser | None = None,
        reader: GridReader | None = None,
    ) -> None:
        self._classifier = classifier or FormatClassifier()
        self._monthly_parser = monthly_parser or MonthlyTableParser()
        self._daily_parser = daily_parser or DailyTableParser()
        self._reader = reader or GridReader()

    def ingest_file(
        self,
        *,
        data: bytes,
        file_name: str,
        session: UsageSessionRepository,
    ) -> UploadOutcome:
        """
        Decode spreadsheet bytes and ingest the resulting grid.
        """

        try:
            grid = self._reader.read(data, file_name)
        except UsageIngestionError as exc:
            return self._failure(file_name=file_name, error=exc)
        return self.ingest_grid(grid=grid, file_name=file_name, session=session)

    def ingest_grid(
        self,
        *,
        grid: RawGrid,
        file_name: str,
        session: UsageSessionRepository,
    ) -> UploadOutcome:
        """
        Classify and parse ``grid``, then apply the dataset to ``session``.
        """

        kind = FileKind.UNKNOWN
        try:
            if not grid or len(grid) < 2:
                raise EmptyGridError("Grid has fewer than two rows.")

            kind = self._classifier.classify(grid)
            if kind is FileKind.MONTHLY:
                return self._apply_monthly(grid=grid, file_name=file_name, session=session)
            if kind is FileKind.DAILY_USERS:
                return self._apply_daily(grid=grid, file_name=file_name, session=session)
            raise UnclassifiableFormatError("Grid matches neither the monthly nor the daily layout.")
        except UsageIngestionError as exc:
            return self._failure(file_name=file_name, error=exc, file_kind=kind)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_monthly(
        self,
        *,
        grid: RawGrid,
        file_name: str,
        session: UsageSessionRepository,
    ) -> UploadOutcome:
        result = self._monthly_parser.parse(grid)
        session.replace_monthly(result.payload, file_name)

        outcome = UploadOutcome(
            file_name=file_name,
            status=STATUS_SUCCESS,
            code=CLASSIFIED_MONTHLY,
            message=OUTCOME_MESSAGES[CLASSIFIED_MONTHLY],
            file_kind=FileKind.MONTHLY,
            rows_accepted=result.rows_accepted,
            rows_skipped=result.rows_skipped,
            skipped_rows=result.skipped_rows,
        )
        self._log_success(outcome)
        return outcome

    def _apply_daily(
        self,
        *,
        grid: RawGrid,
        file_name: str,
        session: UsageSessionRepository,
    ) -> UploadOutcome:
        result = self._daily_parser.parse(grid)
        dataset = DailyDataset(
            dataset_id=new_dataset_id(),
            file_name=file_name,
            records=result.payload,
        )
        session.add_daily(dataset)

        outcome = UploadOutcome(
            file_name=file_name,
            status=STATUS_SUCCESS,
            code=CLASSIFIED_DAILY,
            message=OUTCOME_MESSAGES[CLASSIFIED_DAILY],
            file_kind=FileKind.DAILY_USERS,
            dataset_id=dataset.dataset_id,
            rows_accepted=result.rows_accepted,
            rows_skipped=result.rows_skipped,
            skipped_rows=result.skipped_rows,
        )
        self._log_success(outcome)
        return outcome

    @staticmethod
    def _log_success(outcome: UploadOutcome) -> None:
        logger.info(
            "Upload accepted file=%r code=%s dataset_id=%s rows_accepted=%d rows_skipped=%d",
            outcome.file_name,
            outcome.code,
            outcome.dataset_id,
            outcome.rows_accepted,
            outcome.rows_skipped,
        )

    @staticmethod
    def _failure(
        *,
        file_name: str,
        error: UsageIngestionError,
        file_kind: FileKind = FileKind.UNKNOWN,
    ) -> UploadOutcome:
        logger.warning("Upload rejected file=%r code=%s: %s", file_name, error.code, error)
        return UploadOutcome(
            file_name=file_name,
            status=STATUS_FAILED,
            code=error.code,
            message=OUTCOME_MESSAGES.get(error.code, str(error)),
            file_kind=file_kind,
            rows_skipped=getattr(error, "rows_skipped", 0),
            detail=str(error),
        )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_usage_upload_service() -> UsageUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """
    settings = get_usage_ingestion_settings()
    return UsageUploadService(
        monthly_parser=MonthlyTableParser(
            max_skipped_row_details=settings.max_skipped_row_details,
            log_skipped_rows=settings.log_skipped_rows,
        ),
        daily_parser=DailyTableParser(
            max_skipped_row_details=settings.max_skipped_row_details,
            log_skipped_rows=settings.log_skipped_rows,
        ),
    )
