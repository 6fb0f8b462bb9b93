"""
Database models package for the Department Records service
"""

from .student import Student
from .academic import Course
from .attendance import AttendanceRecord
from .marks import Mark

__all__ = ['Student', 'Course', 'AttendanceRecord', 'Mark']
