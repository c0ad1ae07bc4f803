"""
scoring/ - rubric and aggregation

Modules:
    rubric.py   - Fixed six-criterion rubric, 0-10 per criterion
    utils.py    - Mean / percentage / progress helpers
    ranking.py  - Project leaderboard, per-project breakdown, summary
"""
