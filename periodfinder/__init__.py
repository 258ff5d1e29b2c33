"""
periodfinder - current and next class resolution for weekly school timetables.
"""

__version__ = "0.1.0"
