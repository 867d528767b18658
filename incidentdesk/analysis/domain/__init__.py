"""
Analysis Domain Layer
=====================

Contains:
- Entities: AnalysisRequest, AnalysisResult
- Rules: HeuristicRules (keyword classification)
- Prompts: AnalysisPromptBuilder

This layer is framework-agnostic and contains pure business logic.
"""

from incidentdesk.analysis.domain.entities import AnalysisRequest, AnalysisResult
from incidentdesk.analysis.domain.rules import HeuristicRules
from incidentdesk.analysis.domain.prompts import AnalysisPromptBuilder

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "HeuristicRules",
    "AnalysisPromptBuilder",
]
