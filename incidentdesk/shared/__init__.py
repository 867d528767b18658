"""
Shared Kernel Module
====================

This module contains shared infrastructure and domain elements used across
all bounded contexts (Knowledge Base, Similarity, Analysis).

Architecture Pattern: Modular Monolith
- Each module (knowledge, similarity, analysis) is a bounded context
- Shared kernel contains only generic infrastructure
- Scoring rules live within each module

DO NOT add scoring or routing rules to the shared kernel.
"""

__version__ = "1.0.0"
