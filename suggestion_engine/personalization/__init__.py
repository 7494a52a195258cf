"""
Personalization scoring.

Responsibilities:
- Score one (user, place) pair in [0, 1] from preferences, novelty, avoidance and rating.
- Fan scoring out concurrently over a candidate list, with cancellation.
"""
