from __future__ import annotations

from ...common.datetime_utils import minutes_between
from .base import PayrollCalculator, PunchTimes


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (exit - entry) - (lunch end - lunch start), not below 0.

    A day without both entry and exit counts as zero; the lunch break is only
    deducted when both lunch punches exist.
    """

    def worked_minutes(self, row: PunchTimes) -> int:
        if not row.entry or not row.exit:
            return 0
        minutes = minutes_between(row.entry, row.exit)
        if row.lunch_start and row.lunch_end:
            minutes -= max(minutes_between(row.lunch_start, row.lunch_end), 0)
        return max(minutes, 0)
