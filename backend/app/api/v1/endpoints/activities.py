"""
Personal activity endpoints

  GET    /api/activities               list, latest first
  POST   /api/activities               create
  PUT    /api/activities/{id}          overwrite
  DELETE /api/activities/{id}          delete
  PATCH  /api/activities/{id}/toggle   flip the completed flag
"""
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_activity_service
from app.db.schemas import ActivityCreate, ActivityResponse, ActivityUpdate, MessageResponse
from app.services.activity_service import ActivityService

router = APIRouter()


@router.get("", response_model=List[ActivityResponse])
def list_activities(service: ActivityService = Depends(get_activity_service)):
    return service.list()


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
def create_activity(
    activity:     ActivityCreate,
    service:      ActivityService = Depends(get_activity_service),
):
    return service.create(activity)


@router.put("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id:  int,
    activity:     ActivityUpdate,
    service:      ActivityService = Depends(get_activity_service),
):
    return service.update(activity_id, activity)


@router.delete("/{activity_id}", response_model=MessageResponse)
def delete_activity(
    activity_id:  int,
    service:      ActivityService = Depends(get_activity_service),
):
    service.delete(activity_id)
    return {"message": "Activity deleted successfully"}


@router.patch("/{activity_id}/toggle", response_model=ActivityResponse)
def toggle_activity(
    activity_id:  int,
    service:      ActivityService = Depends(get_activity_service),
):
    """Mark as completed / pending"""
    return service.toggle_complete(activity_id)
