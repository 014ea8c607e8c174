# Security Module
from hoteldesk.security.auth import (
    get_current_user, require_role, require_admin, require_staff_or_admin,
    get_password_hash, verify_password, create_access_token
)

__all__ = [
    'get_current_user', 'require_role', 'require_admin', 'require_staff_or_admin',
    'get_password_hash', 'verify_password', 'create_access_token'
]
