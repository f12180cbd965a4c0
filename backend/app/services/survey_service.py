"""
services/survey_service.py

Satisfaction surveys: capture and aggregate statistics.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import Rating, SatisfactionSurvey
from app.db.schemas import SurveyCreate
from app.utils.exceptions import StoreFailureError

logger = logging.getLogger(__name__)

# Output key prefix -> rated column
RATED_COLUMNS = {
    "info": SatisfactionSurvey.information_rating,
    "guidance": SatisfactionSurvey.guidance_rating,
    "satisfaction": SatisfactionSurvey.satisfaction_rating,
}


def _count_where(condition):
    return func.count(case((condition, 1)))


class SurveyService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, survey: SurveyCreate) -> SatisfactionSurvey:
        try:
            row = SatisfactionSurvey(**survey.model_dump())
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to save survey")
            raise StoreFailureError("Error saving survey", e) from e

        logger.info("Survey saved for case %s", row.national_id)
        return row

    def stats(self) -> List[Dict[str, Any]]:
        """
        One totals row (channel columns null) followed by one row per referral
        channel, most frequent first. Every row repeats the totals.
        """
        labels = []
        columns = [func.count().label("total")]
        for prefix, column in RATED_COLUMNS.items():
            for rating in Rating:
                label = f"{prefix}_{rating.value}"
                labels.append(label)
                columns.append(_count_where(column == rating).label(label))
        columns.append(_count_where(SatisfactionSurvey.would_use_again.is_(True)).label("would_use_again"))

        channel_count = func.count().label("channel_count")
        channels_query = (
            select(SatisfactionSurvey.referral_channel, channel_count)
            .where(SatisfactionSurvey.referral_channel.is_not(None))
            .group_by(SatisfactionSurvey.referral_channel)
            .order_by(channel_count.desc(), SatisfactionSurvey.referral_channel)
        )

        try:
            totals_row = self.db.execute(select(*columns)).one()
            channels = self.db.execute(channels_query).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to compute survey statistics")
            raise StoreFailureError("Error fetching survey statistics", e) from e

        totals = {key: int(value or 0) for key, value in totals_row._mapping.items()}

        response = [{**totals, "referral_channel": None, "channel_count": None}]
        response.extend(
            {**totals, "referral_channel": channel, "channel_count": int(count)}
            for channel, count in channels
        )

        logger.info("Survey statistics: total=%s channels=%d", totals["total"], len(channels))
        return response
