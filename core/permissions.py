# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
# Also the seed data for the role_permissions table (jobs/seed_roles.py).
ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN: Full access to everything
    # =====================================================
    "super_admin": ["*"],

    # =====================================================
    # SOCIETY ADMIN: runs one society
    # =====================================================
    "society_admin": [
        "members:read", "members:write",
        "amenities:read", "amenities:write", "amenities:book",
        "visitors:read", "visitors:create", "visitors:write",
        "events:read", "events:write",
        "maintenance:read", "maintenance:create", "maintenance:write",
        "announcements:read", "announcements:write",
        "houses:read", "houses:write",
        "roles:read", "roles:write",
        "dashboard:read",
    ],

    # =====================================================
    # COMMITTEE MEMBER: day-to-day operations, no roles/houses admin
    # =====================================================
    "committee_member": [
        "members:read",
        "amenities:read", "amenities:write", "amenities:book",
        "visitors:read", "visitors:create", "visitors:write",
        "events:read", "events:write",
        "maintenance:read", "maintenance:create", "maintenance:write",
        "announcements:read", "announcements:write",
        "houses:read",
        "roles:read",
        "dashboard:read",
    ],

    # =====================================================
    # RESIDENT
    # =====================================================
    "resident": [
        "members:read",
        "amenities:read", "amenities:book",
        "visitors:read", "visitors:create",
        "events:read",
        "maintenance:read", "maintenance:create",
        "announcements:read",
        "houses:read",
        "dashboard:read",
    ],

    # =====================================================
    # GUEST / FALLBACK
    # =====================================================
    "guest": [
        "events:read",
        "announcements:read",
    ],
}

PERMISSION_DESCRIPTIONS = {
    "*": "Full access",
    "members:read": "View society members",
    "members:write": "Add and update members",
    "amenities:read": "View amenities and bookings",
    "amenities:write": "Manage amenities and approve bookings",
    "amenities:book": "Book amenities",
    "visitors:read": "View visitor log",
    "visitors:create": "Register visitors",
    "visitors:write": "Approve, reject and check visitors in/out",
    "events:read": "View events",
    "events:write": "Create events",
    "maintenance:read": "View maintenance requests",
    "maintenance:create": "Raise maintenance requests",
    "maintenance:write": "Assign and resolve maintenance requests",
    "announcements:read": "View announcements",
    "announcements:write": "Publish announcements",
    "houses:read": "View houses",
    "houses:write": "Manage houses",
    "roles:read": "View custom roles",
    "roles:write": "Manage custom roles and permissions",
    "dashboard:read": "View dashboard",
    "societies:read": "View all societies",
    "societies:write": "Create societies",
    "societies:delete": "Delete societies",
}

# Platform-wide; only super_admin (via "*") holds these
PLATFORM_PERMISSIONS = ["*", "societies:read", "societies:write", "societies:delete"]
