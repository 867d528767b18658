"""
Analysis Module
===============

Bounded Context for heuristic and LLM-assisted ticket analysis.

Responsibilities:
- Keyword classification of sentiment, urgency and priority
- Team routing and resolution time estimates
- Optional remote analysis with heuristic fallback
"""

__version__ = "1.0.0"
