# jobtrack/services/analytics.py
from __future__ import annotations
import math
from collections import Counter, OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from .jobs import to_utc_datetime
from .models import DEFAULT_STATUS, JOB_STATUSES
from .rounding import round_half_up

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
PERIOD_DAYS = {"last30days": 30, "last90days": 90}

STATUS_COLORS = {
    "applied":   "#3B82F6",
    "interview": "#F59E0B",
    "offered":   "#10B981",
    "rejected":  "#EF4444",
}

def window_start(period: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Start of the analytics window; unknown periods mean all time."""
    now = now or datetime.now(timezone.utc)
    days = PERIOD_DAYS.get((period or "").strip())
    return now - timedelta(days=days) if days else EPOCH

def _rate(part: int, total: int) -> str:
    return f"{part / total * 100:.1f}%" if total else "0%"

def _response_days(job: dict) -> Optional[int]:
    applied = to_utc_datetime(job.get("date_applied"))
    changed = to_utc_datetime(job.get("updated_at"))
    if not applied or not changed:
        return None
    return math.ceil((changed - applied).total_seconds() / 86400)

def build_analytics(jobs: Iterable[dict], period: Optional[str], now: Optional[datetime] = None) -> dict:
    """
    Aggregate a user's job rows into the dashboard payload:
    summary rates, status distribution, per-day counts and per-role breakdown.
    Rows applied before the window start are ignored. A row with no status
    counts as applied; any other unknown status is left out entirely.
    """
    start = window_start(period, now)
    rows = []
    for job in jobs or []:
        status = job.get("status") or DEFAULT_STATUS
        if status not in JOB_STATUSES:
            continue
        applied = to_utc_datetime(job.get("date_applied"))
        if applied and applied >= start:
            rows.append((job, status, applied))

    status_counts = Counter({s: 0 for s in JOB_STATUSES})
    per_day = Counter()
    roles = OrderedDict()
    response_days = []

    for job, status, applied in rows:
        status_counts[status] += 1
        per_day[applied.date().isoformat()] += 1

        role = roles.setdefault(job.get("role"), {"applied": 0, "interview": 0, "offered": 0})
        role["applied"] += 1
        if status in ("interview", "offered"):
            role[status] += 1

        if status != "applied":
            days = _response_days(job)
            if days is not None and days > 0:
                response_days.append(days)

    total = len(rows)
    avg_response = round_half_up(sum(response_days) / len(response_days)) if response_days else 0

    return {
        "summary": {
            "totalApplications": total,
            "interviewRate": _rate(status_counts["interview"], total),
            "offerRate": _rate(status_counts["offered"], total),
            "avgResponseTime": f"{avg_response} days",
        },
        "statusDistribution": [
            {"name": s.capitalize(), "value": status_counts[s], "color": STATUS_COLORS[s]}
            for s in JOB_STATUSES
        ],
        "timeData": [{"date": d, "count": per_day[d]} for d in sorted(per_day)],
        "roleData": [{"name": name, **counts} for name, counts in roles.items()],
    }
