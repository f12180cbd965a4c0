"""
Satisfaction survey endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_survey_service
from app.db.schemas import SurveyCreate, SurveyResponse, SurveyStatsRow
from app.services.survey_service import SurveyService

router = APIRouter()


@router.post("", response_model=SurveyResponse, status_code=status.HTTP_201_CREATED)
def save_survey(survey: SurveyCreate, service: SurveyService = Depends(get_survey_service)):
    return service.create(survey)


@router.get("/stats", response_model=List[SurveyStatsRow])
def get_survey_stats(service: SurveyService = Depends(get_survey_service)):
    """
    Totals row first (referral_channel is null), then one row per referral
    channel repeating the totals.
    """
    return service.stats()
