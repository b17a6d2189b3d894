"""
phoneverify/utils/constants.py

Purpose: Centralized static content

- User-facing success messages
- Verification code parameters
"""

# ============================================================
# VERIFICATION CODES
# ============================================================

CODE_MIN = 100000
CODE_MAX = 999999

# ============================================================
# SUCCESS MESSAGES
# ============================================================

CODE_SENT_MESSAGE = "Verification code sent successfully!"

CODE_VERIFIED_MESSAGE = "Phone number successfully verified!"

# ============================================================
# ERROR MESSAGES (framework level)
# ============================================================

INVALID_REQUEST_BODY_MESSAGE = "Invalid request body."

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."
