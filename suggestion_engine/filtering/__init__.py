"""
Suggestion filter pipeline.

Responsibilities:
- Compute great-circle distances between coordinates.
- Narrow, sort and truncate a candidate list according to FilterCriteria.
- Validate criteria bounds before a pipeline run.
"""
