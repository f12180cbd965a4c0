"""
services/activity_service.py

Personal activity (reminder) CRUD for clinic staff.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import PersonalActivity
from app.db.schemas import ActivityCreate, ActivityUpdate
from app.utils.exceptions import ActivityNotFoundError, StoreFailureError

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[PersonalActivity]:
        """Latest first: by date, then time."""
        try:
            return list(
                self.db.scalars(
                    select(PersonalActivity).order_by(
                        PersonalActivity.activity_date.desc(),
                        PersonalActivity.activity_time.desc(),
                    )
                ).all()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to list activities")
            raise StoreFailureError("Error fetching activities", e) from e

    def create(self, data: ActivityCreate) -> PersonalActivity:
        activity = PersonalActivity(**data.model_dump())
        self._commit(activity, "Error creating activity")
        logger.info("Activity created: %s", activity.id)
        return activity

    def update(self, activity_id: int, data: ActivityUpdate) -> PersonalActivity:
        activity = self._get(activity_id)
        for key, value in data.model_dump().items():
            setattr(activity, key, value)
        self._commit(activity, "Error updating activity")
        return activity

    def delete(self, activity_id: int) -> None:
        activity = self._get(activity_id)
        try:
            self.db.delete(activity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to delete activity %s", activity_id)
            raise StoreFailureError("Error deleting activity", e) from e
        logger.info("Activity deleted: %s", activity_id)

    def toggle_complete(self, activity_id: int) -> PersonalActivity:
        activity = self._get(activity_id)
        activity.completed = not activity.completed
        self._commit(activity, "Error updating activity")
        return activity

    def _get(self, activity_id: int) -> PersonalActivity:
        try:
            activity = self.db.get(PersonalActivity, activity_id)
        except SQLAlchemyError as e:
            logger.exception("Failed to load activity %s", activity_id)
            raise StoreFailureError("Error fetching activity", e) from e
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        return activity

    def _commit(self, activity: PersonalActivity, failure_message: str) -> None:
        try:
            self.db.add(activity)
            self.db.commit()
            self.db.refresh(activity)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(failure_message)
            raise StoreFailureError(failure_message, e) from e
