"""
Similarity Interfaces Layer
===========================

Interface adapters (controllers) for the similarity module.
"""

from incidentdesk.similarity.interfaces.controllers import similarity_router

__all__ = ["similarity_router"]
