"""Initial service records shipped with a fresh store."""

from datetime import datetime

from zosale.domain.entities import ServiceRecord

SEEDED_AT = datetime(2025, 1, 1, 0, 0, 0)


def seed_records() -> list[ServiceRecord]:
    """Three assignments for one employee, one per status, in id order."""
    base = {
        "ref_no": "#ref2024",
        "employee": "Aman Buze",
        "type": "Packages",
        "package_name": "Unlimited Voice",
        "ser_number": "+251980808080",
        "vendor": "ETHIO_TELE",
        "expires": "02/10/2026",
        "created_at": SEEDED_AT,
        "updated_at": SEEDED_AT,
    }
    return [
        ServiceRecord(id="SER-001", status="Active", **base),
        ServiceRecord(id="SER-002", status="Exp_soon", **base),
        ServiceRecord(id="SER-003", status="Expired", **base),
    ]
