"""
Infrastructure Layer
=====================

Technical adapters shared by the modules:
- LLM clients
- Fixture corpus loading
"""
