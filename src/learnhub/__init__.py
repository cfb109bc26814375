"""
learnhub

Identity, course catalog and enrollment services that trust each other only
through signed bearer tokens and a shared relational schema.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
