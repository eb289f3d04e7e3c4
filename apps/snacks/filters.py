"""
Month filters for request listings.

A filter is either absent (every active request, newest submission first)
or a month plus the timestamp it applies to. Both shapes order results by
the filtered field, descending.
"""

from dataclasses import dataclass

from .models import MonthField, SnackRequest
from .order_cycle import format_month, normalize_month, parse_month


@dataclass(frozen=True)
class RequestFilter:
    year: int
    month: int
    field: str = MonthField.EFFECTIVE

    def __post_init__(self):
        year, month = normalize_month(self.year, self.month)
        object.__setattr__(self, 'year', year)
        object.__setattr__(self, 'month', month)
        object.__setattr__(self, 'field', MonthField(self.field))

    @classmethod
    def from_query(cls, month, field=None):
        """
        Build a filter from ``?month=YYYY-MM&month_field=...`` values.

        Returns None for an empty month. Raises InvalidMonthError for a
        malformed one.
        """
        parsed = parse_month(month)
        if parsed is None:
            return None
        return cls(year=parsed[0], month=parsed[1], field=field or MonthField.EFFECTIVE)

    @property
    def period(self):
        return format_month(self.year, self.month)

    def apply(self, queryset):
        return queryset.in_month(self.year, self.month, self.field).newest_first(self.field)


def filter_requests(request_filter=None, queryset=None):
    """Apply an optional RequestFilter to the active requests."""
    if queryset is None:
        queryset = SnackRequest.objects.select_related('owner')
    if request_filter is None:
        return queryset.newest_first()
    return request_filter.apply(queryset)
