"""
Result-set reporting.

Responsibilities:
- Summarise any suggestion collection: category and source distribution,
  score statistics, photo/sponsorship split and recency counts.
"""
