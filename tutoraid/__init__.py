"""
TutorAid: student and lesson records for a small tutoring business.

Keeps students and lessons consistent under enrollment, answers
filtered "show me" queries, and persists both collections as JSON.
"""

__version__ = "0.1.0"
