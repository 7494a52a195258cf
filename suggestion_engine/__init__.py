"""
Suggestion filtering and scoring core.

Responsibilities:
- Narrow a candidate list of place suggestions with an ordered filter pipeline.
- Derive default filter criteria from location, time of day and weather.
- Score a place for a user from stated preferences and external signals.
- Summarise any suggestion collection for reporting.
"""
