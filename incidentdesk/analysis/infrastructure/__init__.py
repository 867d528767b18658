"""
Analysis Infrastructure Layer
=============================

Contains:
- External: LLM client adapter
"""

from incidentdesk.analysis.infrastructure.external import LLMClientAdapter

__all__ = ["LLMClientAdapter"]
