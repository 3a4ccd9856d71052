from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# PROFILE ROLE
# -----------------------------------------------------
class ProfileRole(BaseStrEnum):
    """Built-in roles stored on profiles.role."""

    super_admin = "super_admin"
    society_admin = "society_admin"
    committee_member = "committee_member"
    resident = "resident"
    guest = "guest"


# -----------------------------------------------------
# VISITOR STATUS
# -----------------------------------------------------
class VisitorStatus(BaseStrEnum):
    """Gate workflow for a visitor."""

    pending = "pending"
    approved = "approved"
    checked_in = "checked_in"
    checked_out = "checked_out"
    rejected = "rejected"


class VisitorAction(BaseStrEnum):
    """Actions security / hosts can take on a visitor."""

    approve = "approve"
    reject = "reject"
    check_in = "check-in"
    check_out = "check-out"


# -----------------------------------------------------
# COMPLAINT (MAINTENANCE) STATUS
# -----------------------------------------------------
class ComplaintStatus(BaseStrEnum):
    """Status as stored on complaints.status."""

    open = "open"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"


class MaintenanceStatus(BaseStrEnum):
    """Simplified status shown on the maintenance board."""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class ComplaintPriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


# -----------------------------------------------------
# AMENITY BOOKINGS
# -----------------------------------------------------
class BookingStatus(BaseStrEnum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class PaymentStatus(BaseStrEnum):
    pending = "pending"
    paid = "paid"
    refunded = "refunded"
