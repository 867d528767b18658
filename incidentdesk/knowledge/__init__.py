"""
Knowledge Base Module
=====================

Bounded Context for KB article suggestion.

Responsibilities:
- Score ticket text against the fixed KB corpus
- Rank and filter the matching articles
- Recommend a team from the best match's category
"""

__version__ = "1.0.0"
