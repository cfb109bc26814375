"""
learnhub.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, the transactional unit of work,
  and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in `learnhub.auth` imports from here; the trust contract does not need the store.
