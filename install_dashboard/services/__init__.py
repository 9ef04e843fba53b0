from .install_report import (
    build_report,
    export_csv,
    filter_records,
    group_records,
    summarize_groups,
)
from .servicetitan import ServiceTitanError, get_technicians_payload
from .technician_client import get_technicians

__all__ = [
    "build_report",
    "export_csv",
    "filter_records",
    "group_records",
    "summarize_groups",
    "ServiceTitanError",
    "get_technicians_payload",
    "get_technicians",
]
