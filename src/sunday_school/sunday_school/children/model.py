from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Child:
    """Domain entity: an enrolled child (Makhdoum)."""

    child_id: str
    code: str
    full_name: str
    class_id: Optional[str]
    date_of_birth: Optional[date] = None
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    emergency_contact: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    diseases_allergies: Optional[str] = None
    medications: Optional[str] = None
    special_needs: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Editable guardian/medical fields, in form order.
PROFILE_FIELDS = (
    "mother_name",
    "mother_phone",
    "father_name",
    "father_phone",
    "emergency_contact",
    "address",
    "area",
    "diseases_allergies",
    "medications",
    "special_needs",
    "notes",
)
