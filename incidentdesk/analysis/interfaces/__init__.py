"""
Analysis Interfaces Layer
=========================

Interface adapters (controllers) for the analysis module.
"""

from incidentdesk.analysis.interfaces.controllers import analysis_router

__all__ = ["analysis_router"]
