"""
learnhub.api

API package for the LearnHub services.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error rendering and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
