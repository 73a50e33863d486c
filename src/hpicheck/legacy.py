from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hpicheck.config import RiskConfig
from hpicheck.models import NormalizedHpiReport, RiskSummary
from hpicheck.risk import score_report
from hpicheck.serialization import report_to_dict


@dataclass(frozen=True)
class LegacyVehicleCheck:
    make: str
    model: str
    colour: str
    fuel_type: str
    engine_size: str
    year_of_manufacture: str


@dataclass(frozen=True)
class LegacyHpiResult:
    """Flat HPI result shape read by pre-normalization consumers."""

    stolen: bool
    write_off: bool
    mileage_discrepancy: bool
    outstanding_finance: bool
    previous_owners: int
    last_mot: str | None
    tax_status: str
    insurance_group: int | None
    vehicle_check: LegacyVehicleCheck
    comprehensive_data: NormalizedHpiReport
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        vc = self.vehicle_check
        return {
            "stolen": self.stolen,
            "writeOff": self.write_off,
            "mileageDiscrepancy": self.mileage_discrepancy,
            "outstandingFinance": self.outstanding_finance,
            "previousOwners": self.previous_owners,
            "lastMOT": self.last_mot,
            "taxStatus": self.tax_status,
            "insuranceGroup": self.insurance_group,
            "vehicleCheck": {
                "make": vc.make,
                "model": vc.model,
                "colour": vc.colour,
                "fuelType": vc.fuel_type,
                "engineSize": vc.engine_size,
                "yearOfManufacture": vc.year_of_manufacture,
            },
            "comprehensiveData": report_to_dict(self.comprehensive_data),
            "_raw": self.raw,
        }


def to_legacy(
    report: NormalizedHpiReport,
    raw: dict[str, Any] | None = None,
    risk_summary: RiskSummary | None = None,
    config: RiskConfig | None = None,
) -> LegacyHpiResult:
    summary = risk_summary or score_report(report, config)
    info = report.vehicle_info
    return LegacyHpiResult(
        stolen=summary.is_stolen,
        write_off=summary.is_write_off,
        mileage_discrepancy=False,  # not carried by the HPI response
        outstanding_finance=summary.has_outstanding_finance,
        previous_owners=report.ownership_history.number_of_previous_keepers,
        last_mot=None,
        tax_status="SORN" if report.legal_status.is_scrapped else "Unknown",
        insurance_group=None,
        vehicle_check=LegacyVehicleCheck(
            make=info.make,
            model=info.model,
            colour=info.colour,
            fuel_type=info.fuel_type,
            engine_size=str(info.engine_capacity),
            year_of_manufacture=str(info.manufactured_year),
        ),
        comprehensive_data=report,
        raw=dict(raw or {}),
    )
