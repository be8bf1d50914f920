"""
Employee acknowledgement of a submitted evaluation.

States: PENDING (no approval record) -> APPROVED (record exists, never changes).
The machine only talks to a store with two calls:

    store.get_approval_record(evaluation_id, employee_id) -> ApprovalRecord | None
    store.put_approval_record(record) -> AlreadyApproved | None

and every lookup is scoped to the employee the machine was built for, so an
employee can never read or write another employee's approval.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from django.utils import timezone

from performance_app.exceptions import AlreadyApproved, MissingSignature

logger = logging.getLogger(__name__)


class ApprovalState(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"


@dataclass(frozen=True)
class ApprovalRecord:
    evaluation_id: object
    employee_id: object
    approved_at: datetime
    employee_signature: str
    employee_name: str
    comments: str = ""


class ApprovalStateMachine:

    def __init__(self, store, employee_id):
        if employee_id is None:
            raise ValueError("An approval session needs the employee it acts for")
        self.store = store
        self.employee_id = employee_id

    # --------------------------------------------------------
    # queries
    # --------------------------------------------------------
    def get_approval_data(self, evaluation_id) -> Optional[ApprovalRecord]:
        return self.store.get_approval_record(evaluation_id, self.employee_id)

    def is_approved(self, evaluation_id) -> bool:
        return self.get_approval_data(evaluation_id) is not None

    def state(self, evaluation_id) -> ApprovalState:
        if self.is_approved(evaluation_id):
            return ApprovalState.APPROVED
        return ApprovalState.PENDING

    # --------------------------------------------------------
    # transition
    # --------------------------------------------------------
    def approve(
        self, evaluation_id, employee_signature, employee_name, comments=""
    ) -> Union[ApprovalRecord, MissingSignature, AlreadyApproved]:
        if not (employee_signature or "").strip():
            logger.warning("Approval of evaluation %s rejected: no signature", evaluation_id)
            return MissingSignature(evaluation_id)

        if self.is_approved(evaluation_id):
            logger.warning("Approval of evaluation %s rejected: already approved", evaluation_id)
            return AlreadyApproved(evaluation_id)

        record = ApprovalRecord(
            evaluation_id=evaluation_id,
            employee_id=self.employee_id,
            approved_at=timezone.now(),
            employee_signature=employee_signature,
            employee_name=employee_name,
            comments=(comments or "").strip(),
        )
        conflict = self.store.put_approval_record(record)
        if isinstance(conflict, AlreadyApproved):
            return conflict
        logger.info("Evaluation %s approved by employee %s", evaluation_id, self.employee_id)
        return record
