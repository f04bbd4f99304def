"""Read access to calls and the clinic/assistant directory."""

from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from callreview.middleware.error_handler import NotFoundError, StorageError
from callreview.models import Assistant, Call, Clinic

logger = structlog.get_logger()


class CallRepository:
    """Fetches calls with assistant, clinic, and both kinds of evaluation."""

    def __init__(self, db: Session):
        self.db = db

    def _calls_query(self):
        return self.db.query(Call).options(
            joinedload(Call.assistant).joinedload(Assistant.clinic),
            selectinload(Call.evaluations),
            selectinload(Call.ai_evaluation),
        )

    def list_calls(
        self,
        search: Optional[str] = None,
        clinic_id: Optional[str] = None,
        assistant_id: Optional[str] = None,
    ) -> list[Call]:
        """Return every call, newest first.

        Args:
            search: Case-insensitive substring of the assistant name
            clinic_id: Only calls answered at this clinic
            assistant_id: Only calls answered by this assistant

        Raises:
            StorageError: If the query fails
        """
        try:
            query = self._calls_query()

            if search or clinic_id:
                query = query.join(Assistant, Call.assistant_id == Assistant.id)
            if search:
                query = query.filter(Assistant.name.icontains(search, autoescape=True))
            if clinic_id:
                query = query.filter(Assistant.clinic_id == clinic_id)
            if assistant_id:
                query = query.filter(Call.assistant_id == assistant_id)

            return query.order_by(Call.start_time.desc()).all()
        except SQLAlchemyError as e:
            logger.error("Error fetching calls", error=str(e))
            raise StorageError("Failed to fetch calls") from e

    def get_call(self, call_id: str) -> Call:
        """Return one call.

        Raises:
            NotFoundError: If no call has this id
            StorageError: If the query fails
        """
        try:
            call = self._calls_query().filter(Call.id == call_id).first()
        except SQLAlchemyError as e:
            logger.error("Error fetching call", call_id=call_id, error=str(e))
            raise StorageError("Failed to fetch call") from e

        if not call:
            raise NotFoundError("Call", call_id)
        return call

    def list_clinics(self) -> list[Clinic]:
        try:
            return self.db.query(Clinic).order_by(Clinic.name).all()
        except SQLAlchemyError as e:
            logger.error("Error fetching clinics", error=str(e))
            raise StorageError("Failed to fetch clinics") from e

    def list_assistants(self, clinic_id: str) -> list[Assistant]:
        try:
            return (
                self.db.query(Assistant)
                .filter(Assistant.clinic_id == clinic_id)
                .order_by(Assistant.name)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Error fetching assistants", clinic_id=clinic_id, error=str(e))
            raise StorageError("Failed to fetch assistants") from e
