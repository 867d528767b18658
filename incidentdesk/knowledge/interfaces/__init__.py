"""
Knowledge Base Interfaces Layer
===============================

Interface adapters (controllers) for the KB suggestion module.
"""

from incidentdesk.knowledge.interfaces.controllers import kb_router

__all__ = ["kb_router"]
