"""
Case management endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from app.api.v1.deps import get_case_service
from app.db.schemas import (
    CaseCompleteCreate,
    CaseCompleteUpdate,
    CaseCreate,
    CaseMessageResponse,
    CaseResponse,
    MessageResponse,
    SocioeconomicFormResponse,
)
from app.services.case_service import CaseService

router = APIRouter()

# ============================================================================
# Reads
# ============================================================================

@router.get("", response_model=List[CaseResponse])
def get_cases(service: CaseService = Depends(get_case_service)):
    """All cases, highest national ID first"""
    return service.get_all()


@router.get("/{national_id}", response_model=CaseResponse)
def get_case(national_id: str, service: CaseService = Depends(get_case_service)):
    return service.get_by_id(national_id)


@router.get("/{national_id}/form", response_model=SocioeconomicFormResponse)
def get_socioeconomic_form(national_id: str, service: CaseService = Depends(get_case_service)):
    """Socioeconomic form attached to a case"""
    return service.get_form(national_id)

# ============================================================================
# Writes
# ============================================================================

@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
def create_case(case_data: CaseCreate, service: CaseService = Depends(get_case_service)):
    return service.create(case_data)


@router.post("/complete", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
def create_complete_case(body: CaseCompleteCreate, service: CaseService = Depends(get_case_service)):
    """Create a case together with its socioeconomic form (single transaction)"""
    return service.create_complete(body.case_data, body.socioeconomic_form)

# Specific PUT routes first, the plain /{national_id} route last

@router.put("/{old_id}/migrate/{new_id}", response_model=CaseMessageResponse)
def migrate_case(
    old_id: str,
    new_id: str,
    body: CaseCompleteUpdate,
    service: CaseService = Depends(get_case_service),
):
    """
    Move a case to a new national ID, taking its form, surveys and
    activities along. 409 if the new ID is already in use.
    """
    case = service.migrate_key(old_id, new_id, body.case_data, body.socioeconomic_form)
    return {
        "message": f"National ID migrated successfully from {old_id} to {new_id}",
        "case": case,
    }


@router.put("/{national_id}/complete", response_model=CaseMessageResponse)
def update_complete_case(
    national_id: str,
    body: CaseCompleteUpdate,
    service: CaseService = Depends(get_case_service),
):
    case = service.update_complete(national_id, body.case_data, body.socioeconomic_form)
    return {"message": "Case updated successfully", "case": case}


@router.put("/{national_id}", response_model=CaseResponse)
def update_case(
    national_id: str,
    fields: Dict[str, Any] = Body(...),
    service: CaseService = Depends(get_case_service),
):
    """Partial update. Keys outside the allow-list are ignored."""
    return service.update(national_id, fields)


@router.delete("/{national_id}", response_model=MessageResponse)
def delete_case(national_id: str, service: CaseService = Depends(get_case_service)):
    """Delete the case row. Its form, surveys and activities are kept."""
    service.delete(national_id)
    return {"message": "Case deleted successfully"}
