"""
Context-derived default criteria ("smart filters").

Responsibilities:
- Build a default FilterCriteria from location, local time and weather.
- Memoise generated criteria in an injected TTL cache.
- Offer the fixed popular-filter presets and recommended filters.
"""
