# app/services/case_service.py
"""
Case service - lifecycle of a case record and its dependents.

A case is keyed by the client's national ID. Besides the ``case`` row this
service keeps the socioeconomic form consistent and, when the key itself
changes (``migrate_key``), re-keys satisfaction surveys and personal
activities in the same transaction.

Every public method runs inside ``_transaction``: it commits on success and
rolls back on any exception before the error reaches the caller.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.core.config import settings
from app.db.database import Base
from app.db.models import Case, PersonalActivity, SatisfactionSurvey, SocioeconomicForm
from app.db.schemas import CaseCreate, CaseFields, CaseUpdate, SocioeconomicFormData
from app.services.field_mapper import map_allowed_fields
from app.utils.exceptions import (
    CaseConflictError,
    CaseNotFoundError,
    FormNotFoundError,
    InvalidFieldValueError,
    NoFieldsToUpdateError,
    ServiceError,
    StoreFailureError,
)

logger = logging.getLogger(__name__)


class CaseService:
    """
    Service layer for case-related business logic.

    The session is injected by the caller and owned by it; this class never
    closes it.
    """

    def __init__(self, db: Session):
        self.db = db

    # ========================================================================
    # Transaction scope
    # ========================================================================

    @contextmanager
    def _transaction(self, failure_message: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except ServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("%s: %s", failure_message, e)
            raise StoreFailureError(failure_message, e) from e
        except Exception:
            self.db.rollback()
            logger.exception(failure_message)
            raise

    # ========================================================================
    # Reads
    # ========================================================================

    def get_all(self) -> List[Case]:
        """All cases, highest national ID first. No pagination."""
        with self._transaction("Error fetching cases"):
            cases = list(
                self.db.scalars(select(Case).order_by(Case.national_id.desc())).all()
            )
        logger.info("Found %d cases", len(cases))
        return cases

    def get_by_id(self, national_id: str) -> Case:
        with self._transaction("Error fetching case"):
            case = self.db.get(Case, national_id)
            if case is None:
                raise CaseNotFoundError(national_id)
        return case

    def get_form(self, national_id: str) -> SocioeconomicForm:
        with self._transaction("Error fetching socioeconomic form"):
            form = self._find_form(national_id)
            if form is None:
                raise FormNotFoundError(national_id)
        return form

    # ========================================================================
    # Single-row writes
    # ========================================================================

    def create(self, case_data: CaseCreate) -> Case:
        """Insert one case with the full column list."""
        with self._transaction("Error creating case"):
            case = self._insert_case(case_data.national_id, case_data)
        logger.info("Case created: %s", case.national_id)
        return case

    def update(self, national_id: str, fields: Mapping[str, Any]) -> Case:
        """
        Partial update restricted to the allow-listed columns. ``national_id``
        is never among them.
        """
        with self._transaction("Error updating case"):
            case = self.db.get(Case, national_id)
            if case is None:
                raise CaseNotFoundError(national_id)

            pairs = map_allowed_fields(fields, strict=settings.STRICT_FIELD_ALLOW_LIST)
            if not pairs:
                raise NoFieldsToUpdateError()

            values = self._coerce_update_values(pairs)
            logger.debug("Updating case %s columns: %s", national_id, [column for column, _ in values])

            self.db.execute(
                update(Case)
                .where(Case.national_id == national_id)
                .values(dict(values))
                .execution_options(synchronize_session=False)
            )
            self.db.flush()
            self.db.refresh(case)
        logger.info("Case updated: %s", national_id)
        return case

    def delete(self, national_id: str) -> None:
        """Delete the case row only. Form, surveys and activities stay."""
        with self._transaction("Error deleting case"):
            case = self.db.get(Case, national_id)
            if case is None:
                raise CaseNotFoundError(national_id)
            self.db.delete(case)
            self.db.flush()
        logger.info("Case deleted: %s", national_id)

    # ========================================================================
    # Multi-table writes
    # ========================================================================

    def create_complete(
        self,
        case_data: CaseCreate,
        form_data: Optional[SocioeconomicFormData] = None,
    ) -> Case:
        """Insert the case and, if given, its socioeconomic form atomically."""
        with self._transaction("Error creating complete case"):
            case = self._insert_case(case_data.national_id, case_data)
            if form_data is not None:
                self.db.add(SocioeconomicForm(national_id=case.national_id, **form_data.model_dump()))
                self.db.flush()
        logger.info("Complete case created: %s (form=%s)", case.national_id, form_data is not None)
        return case

    def update_complete(
        self,
        national_id: str,
        case_data: CaseFields,
        form_data: Optional[SocioeconomicFormData] = None,
    ) -> Case:
        """Overwrite every mutable column, then upsert the form."""
        with self._transaction("Error updating complete case"):
            case = self.db.get(Case, national_id)
            if case is None:
                raise CaseNotFoundError(national_id)

            for column, value in case_data.model_dump().items():
                setattr(case, column, value)
            self.db.flush()

            if form_data is not None:
                self._upsert_form(national_id, form_data)
        logger.info("Complete case updated: %s", national_id)
        return case

    def migrate_key(
        self,
        old_id: str,
        new_id: str,
        case_data: CaseFields,
        form_data: Optional[SocioeconomicFormData] = None,
    ) -> Case:
        """
        Move a case to a new national ID.

        The new row is built from ``case_data``, not copied from the old one.
        Surveys and activities are re-keyed in bulk, then the old form and the
        old case are deleted. Nothing is visible unless every step succeeds.
        """
        logger.info("Migrating case %s -> %s", old_id, new_id)
        with self._transaction("Error migrating national ID"):
            old_case = self.db.get(Case, old_id)
            if old_case is None:
                raise CaseNotFoundError(old_id)

            if self.db.get(Case, new_id) is not None:
                raise CaseConflictError(new_id, operation="migrate")

            new_case = self._insert_case(new_id, case_data)

            if form_data is not None:
                self._upsert_form(new_id, form_data)
            elif self._find_form(new_id) is None:
                # No payload: carry the existing form over instead of losing it
                self._rekey(SocioeconomicForm, SocioeconomicForm.national_id, old_id, new_id)

            surveys = self._rekey(SatisfactionSurvey, SatisfactionSurvey.national_id, old_id, new_id)
            activities = self._rekey(PersonalActivity, PersonalActivity.national_id, old_id, new_id)

            self.db.execute(
                delete(SocioeconomicForm)
                .where(SocioeconomicForm.national_id == old_id)
                .execution_options(synchronize_session=False)
            )
            self.db.delete(old_case)
            self.db.flush()

        logger.info(
            "Migration complete: %s -> %s (surveys=%d, activities=%d)",
            old_id, new_id, surveys, activities,
        )
        return new_case

    # ========================================================================
    # Helpers
    # ========================================================================

    def _insert_case(self, national_id: str, case_data: CaseFields) -> Case:
        if self.db.get(Case, national_id) is not None:
            raise CaseConflictError(national_id)

        values = case_data.model_dump(exclude={"national_id"})
        case = Case(national_id=national_id, **values)
        self.db.add(case)
        self.db.flush()
        return case

    def _find_form(self, national_id: str) -> Optional[SocioeconomicForm]:
        return self.db.scalars(
            select(SocioeconomicForm).where(SocioeconomicForm.national_id == national_id)
        ).first()

    def _upsert_form(self, national_id: str, form_data: SocioeconomicFormData) -> SocioeconomicForm:
        """Update the form under ``national_id`` if there is one, else insert it."""
        values = form_data.model_dump()
        form = self._find_form(national_id)
        if form is None:
            form = SocioeconomicForm(national_id=national_id, **values)
            self.db.add(form)
        else:
            for column, value in values.items():
                setattr(form, column, value)
        self.db.flush()
        return form

    def _rekey(
        self, model: Type[Base], column: InstrumentedAttribute, old_id: str, new_id: str
    ) -> int:
        result = self.db.execute(
            update(model)
            .where(column == old_id)
            .values({column.key: new_id})
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    @staticmethod
    def _coerce_update_values(pairs: List[Tuple[str, Any]]) -> List[Tuple[str, Any]]:
        """Validate values against the column types, keeping the input order."""
        try:
            typed: Dict[str, Any] = CaseUpdate.model_validate(dict(pairs)).model_dump()
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidFieldValueError(reasons) from e
        return [(column, typed[column]) for column, _ in pairs]
