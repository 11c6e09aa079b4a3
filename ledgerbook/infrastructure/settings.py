"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv

from ledgerbook.domain.constants import REPORT_COMBINED, REPORT_KINDS
from ledgerbook.infrastructure.logging.logger import get_app_logger


DEFAULT_REPORT_WORKERS = 4


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the single-user ledger.

    Attributes:
        user_id: Identifier of the account holder owning every record.
        user_email: Optional e-mail shown in the presentation layer.
        report_workers: Threads used for concurrent report retrievals.
        default_report_kind: Report kind preselected by the adapters.
    """

    user_id: Optional[str] = None
    user_email: Optional[str] = None
    report_workers: int = DEFAULT_REPORT_WORKERS
    default_report_kind: str = REPORT_COMBINED

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables (and ``.env``).

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        user_id = (os.getenv("LEDGER_USER_ID") or "").strip() or None
        user_email = (os.getenv("LEDGER_USER_EMAIL") or "").strip() or None
        report_workers = cls._parse_workers(
            os.getenv("LEDGER_REPORT_WORKERS"),
            logger=logger,
        )
        report_kind = (
            os.getenv("LEDGER_DEFAULT_REPORT_KIND", REPORT_COMBINED)
            .strip()
            .lower()
        )
        if report_kind not in REPORT_KINDS:
            logger.warning(
                f"Unknown LEDGER_DEFAULT_REPORT_KIND '{report_kind}'; "
                f"using {REPORT_COMBINED}"
            )
            report_kind = REPORT_COMBINED
        return cls(
            user_id=user_id,
            user_email=user_email,
            report_workers=report_workers,
            default_report_kind=report_kind,
        )

    @staticmethod
    def _parse_workers(raw_value: str | None, logger) -> int:
        """Parse the worker count, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Positive worker count.
        """
        if not raw_value:
            return DEFAULT_REPORT_WORKERS
        try:
            workers = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid LEDGER_REPORT_WORKERS '{raw_value}'; "
                f"using {DEFAULT_REPORT_WORKERS}"
            )
            return DEFAULT_REPORT_WORKERS
        if workers < 1:
            logger.warning(
                f"LEDGER_REPORT_WORKERS must be positive, got {workers}; "
                f"using {DEFAULT_REPORT_WORKERS}"
            )
            return DEFAULT_REPORT_WORKERS
        return workers


__all__ = ["LedgerSettings", "DEFAULT_REPORT_WORKERS"]
