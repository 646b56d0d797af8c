from datetime import date, datetime
from typing import Union

from pydantic import BaseModel, ConfigDict, model_validator

from paydesk.core.exceptions import InvalidPeriodError

DATE_FORMAT = "%Y-%m-%d"


def parse_period_date(value: Union[str, date], field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise InvalidPeriodError(
            f"{field} must be a YYYY-MM-DD date, got {value!r}",
            details={"field": field, "value": str(value)},
        )


class Period(BaseModel):
    """A semi-monthly pay window, both ends inclusive."""
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def start_not_after_end(self) -> "Period":
        if self.start > self.end:
            raise ValueError(f"period start {self.start} is after period end {self.end}")
        return self

    @classmethod
    def from_strings(cls, start: Union[str, date], end: Union[str, date]) -> "Period":
        start_date = parse_period_date(start, "period_start")
        end_date = parse_period_date(end, "period_end")
        if start_date > end_date:
            raise InvalidPeriodError(
                f"Period start {start_date.isoformat()} is after period end {end_date.isoformat()}",
                details={"period_start": start_date.isoformat(), "period_end": end_date.isoformat()},
            )
        return cls(start=start_date, end=end_date)

    def is_month_end_cutoff(self, cutoff_day: int) -> bool:
        # Statutory contributions are withheld once a month, on the run whose end falls on/after the cutoff
        return self.end.day >= cutoff_day

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()}/{self.end.isoformat()}"
