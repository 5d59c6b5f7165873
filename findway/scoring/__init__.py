"""
scoring/ - Assessment Scoring Engine

Modules:
    utils.py        - Decimal rounding and clamping helpers
    aggregator.py   - Answers + questions -> RawScores
    normalizer.py   - RawScores -> 0-100 Scores per category
"""
