"""Form state store - single source of truth for the in-progress application"""

import json
import logging
from typing import Any, Dict, Optional

from loan_wizard.domain.models import SubmissionStatus
from loan_wizard.infrastructure.clients.loan_service import LoanServiceClient
from loan_wizard.infrastructure.database.repositories import DurableSlot
from loan_wizard.navigation.navigator import Navigator
from loan_wizard.state.submission import SubmissionWorkflow

logger = logging.getLogger(__name__)


class FormStateStore:
    """
    Holds the partial application across step navigations and restarts.

    The durable slot is read once, on first access. Every update rewrites the
    slot before the in-memory copy changes, so both agree once a call returns.
    """

    def __init__(self, slot: DurableSlot, client: LoanServiceClient, navigator: Navigator):
        self.slot = slot
        self.client = client
        self.navigator = navigator
        self.error: Optional[str] = None
        self.status = SubmissionStatus.IDLE
        self._state: Optional[Dict[str, Any]] = None
        self._workflow = SubmissionWorkflow(self)

    def load(self) -> Dict[str, Any]:
        """Return the current record, reading the durable slot on first access"""
        if self._state is None:
            self._state = self._read_slot()
        return dict(self._state)

    def _read_slot(self) -> Dict[str, Any]:
        raw = self.slot.read()
        if raw is None:
            return {}
        try:
            saved = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable saved application", extra={"slot": self.slot.key})
            return {}
        if not isinstance(saved, dict):
            logger.warning("Discarding non-object saved application", extra={"slot": self.slot.key})
            return {}
        return saved

    @property
    def state(self) -> Dict[str, Any]:
        return self.load()

    @property
    def application_id(self) -> Optional[str]:
        return self.load().get("id")

    @property
    def is_submitting(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING

    def update(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge fields (new values win) and persist the merged record"""
        merged = {**self.load(), **partial}
        self.slot.write(json.dumps(merged))
        self._state = merged
        self.error = None
        return dict(merged)

    async def submit_step(self, step: int, section_data: Dict[str, Any]) -> SubmissionStatus:
        return await self._workflow.submit(step, section_data)

    def reset(self) -> None:
        """Forget the application entirely and return to the first step"""
        self.slot.erase()
        self._state = {}
        self.error = None
        self.status = SubmissionStatus.IDLE
        self.navigator.go_to_step(1)
        logger.info("Application reset")
