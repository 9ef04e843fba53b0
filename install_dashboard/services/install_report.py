# install_dashboard/services/install_report.py
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from install_dashboard.constants import COMMISSION_RATES, GROUP_BY_TECH, GROUP_MODES
from install_dashboard.models import InstallRecord

CSV_HEADERS = [
    "Group",
    "Sales Tech",
    "Invoice $$",
    "COMMISSION",
    "Customer",
    "Installer",
    "Sold Date",
    "Install Date",
]


@dataclass(frozen=True)
class InstallGroup:
    label: str
    rows: list[InstallRecord]
    subtotal: int


@dataclass(frozen=True)
class SummaryRow:
    name: str
    count: int
    total: int
    commission: float


def commission_rate(group_mode: str) -> float:
    if group_mode not in GROUP_MODES:
        raise ValueError(f"Unknown group mode: {group_mode!r}")
    return COMMISSION_RATES[group_mode]


def commission_for(amount, group_mode: str) -> float:
    return round(amount * commission_rate(group_mode), 2)


def group_key(record: InstallRecord, group_mode: str) -> str:
    return record.sold_by_tech if group_mode == GROUP_BY_TECH else record.installer_name


def filter_records(
    records: Iterable[InstallRecord],
    selected_techs: Iterable[str],
    selected_installers: Iterable[str],
) -> list[InstallRecord]:
    """Keep records whose technician AND installer are both selected."""
    techs = set(selected_techs)
    installers = set(selected_installers)
    return [r for r in records if r.sold_by_tech in techs and r.installer_name in installers]


def group_records(records: Iterable[InstallRecord], group_mode: str) -> list[InstallGroup]:
    """
    Group records by technician or installer.

    Groups come back sorted by label, rows inside a group by invoice amount, largest first.
    """
    commission_rate(group_mode)  # rejects unknown modes
    by_label: dict[str, list[InstallRecord]] = {}
    for record in records:
        by_label.setdefault(group_key(record, group_mode), []).append(record)

    groups = []
    for label in sorted(by_label):
        rows = sorted(by_label[label], key=lambda r: r.invoice_amount, reverse=True)
        groups.append(InstallGroup(label=label, rows=rows, subtotal=sum(r.invoice_amount for r in rows)))
    return groups


def summarize_groups(groups: Iterable[InstallGroup], group_mode: str) -> list[SummaryRow]:
    """Per-group count/total/commission, largest total first."""
    summary = [
        SummaryRow(
            name=g.label,
            count=len(g.rows),
            total=g.subtotal,
            commission=commission_for(g.subtotal, group_mode),
        )
        for g in groups
    ]
    return sorted(summary, key=lambda s: s.total, reverse=True)


def grand_total(summary_rows: Iterable[SummaryRow]) -> SummaryRow:
    count = total = 0
    commission = 0.0
    for row in summary_rows:
        count += row.count
        total += row.total
        commission += row.commission
    return SummaryRow(name="Grand Total", count=count, total=total, commission=round(commission, 2))


def build_report(
    records: Iterable[InstallRecord],
    group_mode: str,
    selected_techs: Iterable[str],
    selected_installers: Iterable[str],
    range_mode: bool = False,
) -> dict:
    """Filtered + grouped view of the records; summary rows only in range mode."""
    groups = group_records(filter_records(records, selected_techs, selected_installers), group_mode)
    summary = summarize_groups(groups, group_mode) if range_mode else []
    return {
        "group_mode": group_mode,
        "rate": commission_rate(group_mode),
        "groups": groups,
        "summary": summary,
        "grand": grand_total(summary),
    }


def _csv_value(value) -> str:
    # 60.0 -> "60", 62.5 -> "62.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_csv(groups: Iterable[InstallGroup], group_mode: str) -> str:
    """
    Serialize every row plus a subtotal row per group.

    All fields are quoted, embedded quotes are doubled, lines end with "\\n".
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for g in groups:
        for r in g.rows:
            writer.writerow([_csv_value(v) for v in (
                g.label,
                r.sold_by_tech,
                r.invoice_amount,
                commission_for(r.invoice_amount, group_mode),
                r.customer_name,
                r.installer_name,
                r.sold_date,
                r.install_date,
            )])
        writer.writerow([
            f"Subtotal for {g.label}",
            "",
            _csv_value(g.subtotal),
            _csv_value(commission_for(g.subtotal, group_mode)),
            "", "", "", "",
        ])
    return buf.getvalue().rstrip("\n")


def csv_filename(group_mode: str, day: Optional[str] = None,
                 range_start: Optional[str] = None, range_end: Optional[str] = None) -> str:
    if range_start and range_end:
        return f"installs_{range_start}_to_{range_end}_{group_mode}.csv"
    return f"installs_{day}_{group_mode}.csv"


def normalize_range(start: str, end: str) -> tuple[str, str]:
    return (start, end) if start <= end else (end, start)


def enumerate_dates_inclusive(start_iso: str, end_iso: str) -> list[str]:
    start = date.fromisoformat(start_iso)
    end = date.fromisoformat(end_iso)
    days = []
    current = start
    while current <= end:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days
