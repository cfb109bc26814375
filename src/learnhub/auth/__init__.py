"""
learnhub.auth

Authentication/authorization package.

Responsibilities:
- Claim schema and role types shared by every service.
- Token issuing and verification helpers.
- Role/ownership policy rules and FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `models`, `jwt` and `policy` import nothing from `db` or `api`; every service
# carries an identical copy of this contract and verifies tokens locally.
