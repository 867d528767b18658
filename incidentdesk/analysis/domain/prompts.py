"""
Analysis Prompt Builder
=======================

Prompts for remote ticket analysis.
"""

from incidentdesk.analysis.domain.entities import AnalysisRequest


class AnalysisPromptBuilder:
    """
    Builds prompts for ticket analysis.

    All prompt text lives here.
    """

    SYSTEM_PROMPT = (
        "You are an expert IT incident analyst. "
        "Provide accurate, structured analysis of IT tickets in JSON format."
    )

    @classmethod
    def build_prompt(cls, request: AnalysisRequest) -> str:
        """Build the analysis prompt from ticket content."""
        return f"""Analyze this IT incident ticket and provide structured insights:

Title: {request.ticket_title}
Description: {request.ticket_description}
Category: {request.category}
Reported By: {request.reported_by or 'Unknown'}

Respond ONLY with a JSON object with these keys:
1. sentiment (positive/neutral/negative/urgent)
2. suggestedPriority (low/medium/high/critical)
3. urgencyScore (0.0 to 1.0)
4. suggestedTeam (Infrastructure/Network/Application Support/Security/Hardware Support/General Support)
5. keyInsights (array of 3-5 important observations)
6. estimatedResolutionTime (realistic time estimate)

Focus on technical accuracy and business impact assessment."""

    @classmethod
    def get_system_prompt(cls) -> str:
        """Get the system prompt for analysis."""
        return cls.SYSTEM_PROMPT
