"""
Gift recommendation engine.

Responsibilities:
- Translate a recipient profile into catalog search queries.
- Merge the candidate books returned for each query.
- Score and rank candidates using deterministic heuristics.
- Return shaped gift suggestions ready for API serialisation.
"""
