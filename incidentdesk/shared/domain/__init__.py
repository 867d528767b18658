"""
Shared Domain Helpers
=====================

Generic text helpers used by the scoring modules.
"""

from incidentdesk.shared.domain.text import tokenize, significant_words, word_set

__all__ = ["tokenize", "significant_words", "word_set"]
