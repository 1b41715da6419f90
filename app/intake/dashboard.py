from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from app.intake.csv_codec import CsvDocument
from app.intake.models import DEFAULT_SOURCE


@dataclass(frozen=True)
class DashboardReport:
    total: int
    by_source: list[tuple[str, int]]
    headers: list[str]
    rows: list[list[str]]


def build_report(doc: CsvDocument) -> DashboardReport:
    """Summary counts plus one table row per record. Missing cells render empty."""
    counts: Counter[str] = Counter()
    rows: list[list[str]] = []
    for rec in doc.records:
        counts[(rec.get("source") or "").strip() or DEFAULT_SOURCE] += 1
        rows.append([rec.get(h) or "" for h in doc.headers])

    by_source = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return DashboardReport(
        total=len(doc.records),
        by_source=by_source,
        headers=list(doc.headers),
        rows=rows,
    )
