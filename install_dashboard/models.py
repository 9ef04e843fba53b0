# install_dashboard/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Technician:
    id: Optional[Any]
    name: str
    active: bool = True

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Technician":
        """
        Build a Technician from a ServiceTitan technician object.

        Name falls back from "firstName lastName" to name, displayName, then "Unknown".
        Id falls back from id to technicianId / TechnicianId.
        """
        full_name = " ".join(p for p in (raw.get("firstName"), raw.get("lastName")) if p)
        name = full_name or raw.get("name") or raw.get("displayName") or "Unknown"

        tech_id = raw.get("id")
        if tech_id is None:
            tech_id = raw.get("technicianId", raw.get("TechnicianId"))

        return cls(id=tech_id, name=name, active=bool(raw.get("active", True)))


@dataclass(frozen=True)
class InstallRecord:
    install_date: str  # ISO "YYYY-MM-DD"
    sold_date: str
    invoice_amount: int
    customer_name: str
    installer_name: str
    sold_by_tech: str

    @property
    def date(self) -> str:
        # Older consumers key records by "date"
        return self.install_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.install_date,
            "installDate": self.install_date,
            "soldDate": self.sold_date,
            "invoiceAmount": self.invoice_amount,
            "customerName": self.customer_name,
            "installerName": self.installer_name,
            "soldByTech": self.sold_by_tech,
        }
