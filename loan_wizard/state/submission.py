"""Submission workflow - create-or-update a step's data, then advance"""

import logging
import time
from typing import TYPE_CHECKING, Any, Dict

from loan_wizard.domain.exceptions import LoanServiceError
from loan_wizard.domain.models import FINAL_STEP, SECTIONS, SubmissionStatus
from loan_wizard.infrastructure.observability.logging import log_submission
from loan_wizard.infrastructure.observability.metrics import record_submission

if TYPE_CHECKING:
    from loan_wizard.state.store import FormStateStore

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred"


class SubmissionWorkflow:
    """State machine for one step submission: idle -> submitting -> success | failed"""

    def __init__(self, store: "FormStateStore"):
        self.store = store

    async def submit(self, step: int, section_data: Dict[str, Any]) -> SubmissionStatus:
        """
        Send the merged application to the record store and advance on success.

        Flow:
        1. Clear the previous error and mark the store busy
        2. Merge the section into a draft of the application (store untouched)
        3. Update by id when one exists, otherwise create (confirmed forced to False)
           and adopt the returned id
        4. On success commit the section and move to the next step
           (or the success view after the final step)
        5. On failure keep state and route as they were and expose the message

        Calls made before an id exists each create a new remote record.
        """
        if step not in SECTIONS:
            raise ValueError(f"Unknown step: {step}")

        store = self.store
        store.error = None
        store.status = SubmissionStatus.SUBMITTING
        start_time = time.time()

        draft = {**store.load(), **section_data}
        application_id = draft.get("id")

        try:
            if application_id:
                await store.client.update(application_id, draft)
            else:
                payload = {key: value for key, value in draft.items() if key != "id"}
                payload["confirmed"] = False
                created = await store.client.create(payload)
                application_id = created.get("id")
                if not application_id:
                    raise LoanServiceError("Failed to create loan application: response carried no id")
                store.update({"id": application_id})

        except LoanServiceError as e:
            return self._fail(step, application_id, str(e) or GENERIC_ERROR, start_time)
        except Exception as e:
            logger.exception("Unexpected submission error", extra={"step": step})
            return self._fail(step, application_id, str(e) or GENERIC_ERROR, start_time)

        store.update(section_data)
        if step == FINAL_STEP:
            store.navigator.go_to_success()
        else:
            store.navigator.go_to_step(step + 1)
        store.status = SubmissionStatus.SUCCESS

        record_submission(step, succeeded=True)
        log_submission(step, application_id, True, (time.time() - start_time) * 1000)
        return store.status

    def _fail(self, step: int, application_id: Any, message: str, start_time: float) -> SubmissionStatus:
        store = self.store
        store.error = message
        store.status = SubmissionStatus.FAILED

        record_submission(step, succeeded=False)
        log_submission(step, application_id, False, (time.time() - start_time) * 1000, error=message)
        return store.status
