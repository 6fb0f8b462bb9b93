"""
Validation utilities for the Department Records service
"""

import math
import re
from datetime import datetime, date


def validate_registration_number(registration_number):
    """Validate student registration number format"""
    if not registration_number or len(str(registration_number).strip()) == 0:
        return False, "Registration number is required"

    registration_number = str(registration_number)

    if len(registration_number) > 30:
        return False, "Registration number must be 30 characters or less"

    if not re.match(r'^[A-Za-z0-9_-]+$', registration_number):
        return False, "Registration number can only contain letters, numbers, hyphens, and underscores"

    return True, "Valid registration number"


def validate_name(name, field_name="Name"):
    """Validate person name"""
    if not name or len(str(name).strip()) == 0:
        return False, f"{field_name} is required"

    name = str(name)

    if len(name) > 100:
        return False, f"{field_name} must be 100 characters or less"

    # Allow letters, spaces, and common name characters
    if not re.match(r'^[A-Za-z\s\.\-\']+$', name):
        return False, f"{field_name} can only contain letters, spaces, periods, hyphens, and apostrophes"

    return True, f"Valid {field_name.lower()}"


def validate_department(department):
    """Validate department name"""
    if not department or len(str(department).strip()) == 0:
        return False, "Department is required"

    department = str(department)

    if len(department) > 100:
        return False, "Department must be 100 characters or less"

    return True, "Valid department"


def validate_course_code(course_code):
    """Validate course code format"""
    if not course_code or len(str(course_code).strip()) == 0:
        return False, "Course code is required"

    course_code = str(course_code)

    if len(course_code) > 20:
        return False, "Course code must be 20 characters or less"

    if not re.match(r'^[A-Za-z0-9_-]+$', course_code):
        return False, "Course code can only contain letters, numbers, hyphens, and underscores"

    return True, "Valid course code"


def validate_year(year):
    """Validate year of study (1 to 4)"""
    try:
        year_int = int(year)
        if year_int < 1 or year_int > 4:
            return False, "Year must be between 1 and 4"
        return True, "Valid year"
    except (ValueError, TypeError):
        return False, "Year must be a number"


def validate_semester(semester):
    """Validate semester number"""
    try:
        sem_int = int(semester)
        if sem_int < 1 or sem_int > 8:
            return False, "Semester must be between 1 and 8"
        return True, "Valid semester"
    except (ValueError, TypeError):
        return False, "Semester must be a number"


def validate_marks(marks):
    """Validate that marks are numeric; range is enforced by clamping on save"""
    if isinstance(marks, bool):
        return False, "Marks must be a valid number"
    try:
        value = float(marks)
    except (ValueError, TypeError):
        return False, "Marks must be a valid number"

    if not math.isfinite(value):
        return False, "Marks must be a finite number"

    return True, "Valid marks"


def validate_date(date_str):
    """Validate date format"""
    try:
        if isinstance(date_str, str):
            datetime.strptime(date_str, '%Y-%m-%d')
        elif isinstance(date_str, date):
            pass  # Already a date object
        else:
            return False, "Invalid date format"

        return True, "Valid date"
    except ValueError:
        return False, "Date must be in YYYY-MM-DD format"


def parse_date(value):
    """Turn a YYYY-MM-DD string (or a date) into a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, '%Y-%m-%d').date()


def validate_student_data(data):
    """Validate the payload of an add-student request.

    Returns (is_valid, message) for the first failing field.
    """
    checks = (
        validate_name(data.get('name')),
        validate_registration_number(data.get('registration_number')),
        validate_department(data.get('department')),
        validate_year(data.get('year', 1)),
        validate_semester(data.get('semester', 1)),
    )
    for is_valid, message in checks:
        if not is_valid:
            return False, message
    return True, "Valid student"
