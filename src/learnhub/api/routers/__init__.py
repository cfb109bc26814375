"""
learnhub.api.routers

HTTP routers, one module per service plus health probes.
"""

# Package marker.
