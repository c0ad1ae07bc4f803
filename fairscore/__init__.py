"""
fairscore - Science Fair Evaluation Platform

Panel assignment, rubric scoring lifecycle, ranking and remote sync for
science-fair project evaluation.
"""

__version__ = "1.0.0"
