"""
learnhub.services

Service layer.

Responsibilities:
- Own transaction boundaries and authorization for each service's operations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Every protected operation follows: verify (API dependency) -> fetch -> authorize -> mutate.
