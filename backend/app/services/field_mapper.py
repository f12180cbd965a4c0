"""
services/field_mapper.py

Allow-list for partial case updates.

Input names form a closed enumeration (``CaseField``) and each one maps to a
column of the ``case`` table. ``national_id`` is deliberately not a member:
the key only changes through ``CaseService.migrate_key``.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, Mapping, Tuple

from app.utils.exceptions import UnknownFieldsError

logger = logging.getLogger(__name__)


class CaseField(str, enum.Enum):
    intake_date = "intake_date"
    management_period = "management_period"
    full_name = "full_name"
    birth_date = "birth_date"
    process_number = "process_number"
    phone = "phone"
    landline_phone = "landline_phone"
    email = "email"
    address = "address"
    legal_matter = "legal_matter"
    process_type = "process_type"
    party_role = "party_role"
    judge_prosecutor = "judge_prosecutor"
    judge_prosecutor_secondary = "judge_prosecutor_secondary"
    counterparty = "counterparty"
    activities_performed = "activities_performed"
    current_status = "current_status"
    next_activity_date = "next_activity_date"
    occupation = "occupation"
    education_level = "education_level"
    ethnicity = "ethnicity"
    gender = "gender"
    civil_status = "civil_status"
    number_of_children = "number_of_children"
    disability = "disability"
    user_type = "user_type"
    service_line = "service_line"
    topic = "topic"
    assigned_student = "assigned_student"
    legal_counsel = "legal_counsel"


# Input name -> column name
CASE_UPDATE_COLUMNS: Dict[CaseField, str] = {field: field.value for field in CaseField}


def map_allowed_fields(
    candidate: Mapping[str, Any],
    allowed: Mapping[CaseField, str] = CASE_UPDATE_COLUMNS,
    strict: bool = False,
) -> List[Tuple[str, Any]]:
    """
    Translate ``candidate`` into ``(column, value)`` pairs, keeping only keys
    present in ``allowed`` and preserving the candidate's order.

    Unknown keys are dropped (and logged). With ``strict=True`` they raise
    ``UnknownFieldsError`` instead. An empty result is returned as-is; the
    caller decides that it is a client error.
    """
    pairs: List[Tuple[str, Any]] = []
    unknown: List[str] = []

    for key, value in candidate.items():
        try:
            field = CaseField(key)
        except ValueError:
            unknown.append(key)
            continue
        column = allowed.get(field)
        if column is None:
            unknown.append(key)
            continue
        pairs.append((column, value))

    if unknown:
        if strict:
            raise UnknownFieldsError(unknown)
        logger.warning("Ignoring fields outside the update allow-list: %s", ", ".join(unknown))

    return pairs
