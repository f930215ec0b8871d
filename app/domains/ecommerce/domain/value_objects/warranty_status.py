"""
Warranty claim lifecycle.
"""

from app.core.domain import StatusEnum


class WarrantyClaimStatus(StatusEnum):
    """
    Valid transitions:
    - SUBMITTED -> UNDER_REVIEW, REJECTED
    - UNDER_REVIEW -> APPROVED, REJECTED
    - APPROVED -> RESOLVED
    - REJECTED, RESOLVED -> (terminal states)
    """

    SUBMITTED = 0
    UNDER_REVIEW = 1
    APPROVED = 2
    REJECTED = 3
    RESOLVED = 4

    @classmethod
    def transition_table(cls):
        return _WARRANTY_TRANSITIONS


_WARRANTY_TRANSITIONS = {
    WarrantyClaimStatus.SUBMITTED: frozenset({WarrantyClaimStatus.UNDER_REVIEW, WarrantyClaimStatus.REJECTED}),
    WarrantyClaimStatus.UNDER_REVIEW: frozenset({WarrantyClaimStatus.APPROVED, WarrantyClaimStatus.REJECTED}),
    WarrantyClaimStatus.APPROVED: frozenset({WarrantyClaimStatus.RESOLVED}),
}
