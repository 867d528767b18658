"""
Analysis Application Layer
==========================

Contains:
- Services: TicketAnalysisService and the classifier strategies
- DTOs: Data transfer objects for API serialization
"""

from incidentdesk.analysis.application.dto import (
    TicketAnalysisRequest,
    TicketAnalysisResponse,
    AnalysisInfo,
)
from incidentdesk.analysis.application.services import (
    TicketAnalysisService,
    ITicketClassifier,
    HeuristicTicketClassifier,
    LLMTicketClassifier,
    ILLMClient,
)

__all__ = [
    # DTOs
    "TicketAnalysisRequest",
    "TicketAnalysisResponse",
    "AnalysisInfo",
    # Services
    "TicketAnalysisService",
    "ITicketClassifier",
    "HeuristicTicketClassifier",
    "LLMTicketClassifier",
    # Interfaces
    "ILLMClient",
]
