"""
utils/constants.py

Purpose: Centralized static content

- All client-facing messages
- Collection and field names shared by the store layers

(Prevents hardcoding across the codebase)
"""

# ============================================================
# SUCCESS MESSAGES
# ============================================================

REGISTER_SUCCESS_MESSAGE = "User registered successfully"
LOGIN_SUCCESS_MESSAGE = "Login successful"
LOGOUT_SUCCESS_MESSAGE = "Logout successful"

# ============================================================
# ERROR MESSAGES
# ============================================================

# Register
ALL_FIELDS_REQUIRED_MESSAGE = "All fields required"
INVALID_MOBILE_MESSAGE = "Mobile number must be exactly 10 digits"
PASSWORD_TOO_LONG_MESSAGE = "Password must be at most 72 bytes"
USER_EXISTS_MESSAGE = "User already exists with this email or mobile"

# Login
LOGIN_FIELDS_REQUIRED_MESSAGE = "Email and password required"
# Shared by "unknown email" and "wrong password" so responses cannot
# be used to enumerate accounts.
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

# Current user
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"
USER_NOT_FOUND_MESSAGE = "User not found"

# Logout
LOGOUT_FAILED_MESSAGE = "Logout failed"

# Generic
SERVER_ERROR_MESSAGE = "Server error"
INVALID_BODY_MESSAGE = "Invalid request body"

# ============================================================
# STORAGE
# ============================================================

USERS_COLLECTION = "users"
SESSIONS_COLLECTION = "sessions"

# bcrypt only consumes the first 72 bytes of input
BCRYPT_MAX_PASSWORD_BYTES = 72

MOBILE_LENGTH = 10
