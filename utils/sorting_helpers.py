"""
Sorting helper utilities for the Department Records service
Provides consistent ordering for student and course listings
"""

import re


class SortingHelpers:
    """Helper class for sorting operations"""

    @staticmethod
    def _numeric_part(value):
        numeric_match = re.search(r'(\d+)', value or '')
        if numeric_match:
            return int(numeric_match.group(1))
        return 999999  # Put non-numeric at end

    @staticmethod
    def get_student_sort_key(student):
        """
        Get sort key for student: department, then the numeric part of the
        registration number, then the raw registration number
        """
        registration_number = student.registration_number.upper()
        return (
            student.department or '',
            SortingHelpers._numeric_part(registration_number),
            registration_number
        )

    @staticmethod
    def get_course_sort_key(course):
        """Get sort key for course: alphabetic prefix then course number"""
        code = course.code.upper()
        prefix = re.sub(r'\d.*$', '', code)
        return (prefix, SortingHelpers._numeric_part(code), code)

    @staticmethod
    def sort_students(students):
        """Sort students using the standard sorting logic"""
        return sorted(students, key=SortingHelpers.get_student_sort_key)

    @staticmethod
    def sort_courses(courses):
        """Sort courses using the standard sorting logic"""
        return sorted(courses, key=SortingHelpers.get_course_sort_key)
