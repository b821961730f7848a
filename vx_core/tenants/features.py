# backend/vx_core/tenants/features.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Feature:
    code: str
    name: str
    description: str
    category: str
    default_enabled: bool = True


# Codes a tenant can switch on/off. Tenants without a stored override get the default.
FEATURE_CATALOGUE: tuple[Feature, ...] = (
    Feature("patient_records", "Patient records", "Clinic patient registry", "clinical"),
    Feature("vaccination_tracking", "Vaccination tracking", "Record administered doses", "clinical"),
    Feature("audit_log", "Audit log", "Browse the clinic audit trail", "compliance"),
    Feature("staff_invitations", "Staff invitations", "Invite staff by email token", "administration"),
    Feature(
        "vaccination_certificates",
        "Vaccination certificates",
        "Printable certificates for completed doses",
        "clinical",
        default_enabled=False,
    ),
    Feature("sms_reminders", "SMS reminders", "Text message reminders to families", "engagement", default_enabled=False),
)

FEATURES_BY_CODE = {f.code: f for f in FEATURE_CATALOGUE}
