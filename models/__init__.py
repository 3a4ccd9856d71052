# -------------------------
# Enums
# -------------------------
from .enums import (
    ProfileRole,
    VisitorStatus,
    VisitorAction,
    ComplaintStatus,
    ComplaintPriority,
    MaintenanceStatus,
    BookingStatus,
    PaymentStatus,
)

# -------------------------
# View state
# -------------------------
from .snapshot import ResourceSnapshot, TenantContext

# -------------------------
# Request bodies
# -------------------------
from .member import MemberCreate, MemberDetails, MemberUpsertResult
from .amenity import BookingCreate, BookingUpdate
from .visitor import VisitorCreate
from .event import EventCreate
from .complaint import ComplaintCreate, ComplaintUpdate
from .announcement import AnnouncementCreate
from .house import HouseCreate, HouseUpdate
from .role import SocietyRoleCreate, RolePermissionsUpdate
from .society import SocietyCreate
from .auth import LoginRequest, TokenResponse, PasswordResetRequest

__all__ = [
    # enums
    "ProfileRole",
    "VisitorStatus",
    "VisitorAction",
    "ComplaintStatus",
    "ComplaintPriority",
    "MaintenanceStatus",
    "BookingStatus",
    "PaymentStatus",

    # view state
    "ResourceSnapshot",
    "TenantContext",

    # members
    "MemberCreate",
    "MemberDetails",
    "MemberUpsertResult",

    # amenities
    "BookingCreate",
    "BookingUpdate",

    # visitors / events / maintenance / announcements
    "VisitorCreate",
    "EventCreate",
    "ComplaintCreate",
    "ComplaintUpdate",
    "AnnouncementCreate",

    # houses / roles
    "HouseCreate",
    "HouseUpdate",
    "SocietyRoleCreate",
    "RolePermissionsUpdate",

    # societies
    "SocietyCreate",

    # auth
    "LoginRequest",
    "TokenResponse",
    "PasswordResetRequest",
]
