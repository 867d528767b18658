"""
Similarity Module
=================

Bounded Context for duplicate detection and ticket clustering.

Responsibilities:
- Jaccard similarity between a new ticket and the historical sample
- Greedy clustering of near-duplicates with a suggested action
- Insights and recommendations derived from the clusters
"""

__version__ = "1.0.0"
