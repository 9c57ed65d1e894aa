from datetime import datetime

from zosale.domain.entities import ServiceRecord, ServiceStatus


class InvalidTransitionError(ValueError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, current: ServiceStatus, new: ServiceStatus) -> None:
        super().__init__(f"Invalid transition from {current} to {new}")
        self.current = current
        self.new = new


def can_enable(current: ServiceStatus) -> bool:
    """Expired and expiring-soon services can be re-activated."""
    return current in ("Expired", "Exp_soon")


def can_disable(current: ServiceStatus) -> bool:
    """Only active services can be disabled."""
    return current == "Active"


def can_transition(current: ServiceStatus, new: ServiceStatus) -> bool:
    """
    Determine if an enable/disable transition is allowed.

    Exp_soon is never a target here; it is only set through a full update.
    """
    if new == "Active":
        return can_enable(current)
    if new == "Expired":
        return can_disable(current)
    return False


def transition(record: ServiceRecord, new_status: ServiceStatus, now: datetime) -> ServiceRecord:
    """
    Return a NEW ServiceRecord with the updated status and updated_at.
    Raises InvalidTransitionError if the transition is not allowed.
    """
    if not can_transition(record.status, new_status):
        raise InvalidTransitionError(record.status, new_status)

    return record.model_copy(
        update={
            "status": new_status,
            "updated_at": max(now, record.created_at),
        }
    )
