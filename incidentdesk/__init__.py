"""
IncidentDesk
============

Incident triage assistance: KB article suggestions, duplicate detection
and ticket analysis.
"""

__version__ = "1.0.0"
