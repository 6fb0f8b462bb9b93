#!/usr/bin/env python3
"""
Seed data for the Department Records service
Loads the demonstration roster into a records store at startup
"""

import json
import logging

from services.errors import DuplicateRegistrationError

logger = logging.getLogger(__name__)

DEFAULT_SEED = {
    'students': [
        {'id': 'S001', 'name': 'John Student', 'registration_number': 'RA2211003010280',
         'department': 'Computer Science', 'year': 3, 'semester': 5},
        {'id': 'S002', 'name': 'Alice Thompson', 'registration_number': 'RA2211003010281',
         'department': 'Computer Science', 'year': 3, 'semester': 5},
        {'id': 'S003', 'name': 'Bob Johnson', 'registration_number': 'RA2211003010282',
         'department': 'Computer Science', 'year': 3, 'semester': 5},
    ],
    'courses': [
        {'code': 'CS101', 'name': 'Introduction to Programming', 'department': 'Computer Science',
         'faculty_id': 'F001', 'max_hours': 50},
        {'code': 'CS205', 'name': 'Data Structures', 'department': 'Computer Science',
         'faculty_id': 'F001', 'max_hours': 50},
        {'code': 'CS301', 'name': 'Algorithms', 'department': 'Computer Science',
         'faculty_id': 'F001', 'max_hours': 50},
        {'code': 'CS401', 'name': 'Database Systems', 'department': 'Computer Science',
         'faculty_id': 'F002', 'max_hours': 50},
        {'code': 'CS501', 'name': 'Computer Networks', 'department': 'Computer Science',
         'faculty_id': 'F002', 'max_hours': 50},
        {'code': 'CS601', 'name': 'Operating Systems', 'department': 'Computer Science',
         'faculty_id': 'F002', 'max_hours': 50},
    ],
    'attendance': [
        {'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-01', 'present': True},
        {'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-02', 'present': True},
        {'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-03', 'present': False},
        {'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-04', 'present': True},
        {'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-05', 'present': True},
        {'student_id': 'S001', 'course_code': 'CS205', 'date': '2025-04-01', 'present': True},
        {'student_id': 'S001', 'course_code': 'CS205', 'date': '2025-04-02', 'present': False},
        {'student_id': 'S001', 'course_code': 'CS205', 'date': '2025-04-03', 'present': True},
    ],
    'marks': [
        {'student_id': 'S001', 'course_code': 'CS101', 'marks': 45},
        {'student_id': 'S001', 'course_code': 'CS205', 'marks': 52},
        {'student_id': 'S001', 'course_code': 'CS301', 'marks': 48},
        {'student_id': 'S001', 'course_code': 'CS401', 'marks': 39},
        {'student_id': 'S001', 'course_code': 'CS501', 'marks': 42},
        {'student_id': 'S001', 'course_code': 'CS601', 'marks': 50},
        {'student_id': 'S002', 'course_code': 'CS101', 'marks': 50},
        {'student_id': 'S002', 'course_code': 'CS205', 'marks': 48},
        {'student_id': 'S002', 'course_code': 'CS301', 'marks': 53},
        {'student_id': 'S003', 'course_code': 'CS101', 'marks': 42},
        {'student_id': 'S003', 'course_code': 'CS205', 'marks': 39},
        {'student_id': 'S003', 'course_code': 'CS301', 'marks': 44},
    ],
}


def load_seed_data(store, seed=None):
    """Load courses, students, attendance and marks into the store.

    Students whose registration number is already present are skipped.
    When a seed student's id is taken the store assigns a new one, and the
    seed's attendance and mark rows for that student follow the new id.
    Returns a dict of counts per collection.
    """
    seed = seed if seed is not None else DEFAULT_SEED
    counts = {'courses': 0, 'students': 0, 'attendance': 0, 'marks': 0}
    reassigned = {}

    for course_data in seed.get('courses', []):
        store.seed_course(course_data)
        counts['courses'] += 1

    for student_data in seed.get('students', []):
        try:
            student_id = store.add_student(student_data)
        except DuplicateRegistrationError as e:
            logger.warning("Skipping seed student: %s", e)
            continue
        counts['students'] += 1
        requested_id = student_data.get('id')
        if requested_id and requested_id != student_id:
            logger.warning("Seed student id %s is taken, loaded as %s", requested_id, student_id)
            reassigned[requested_id] = student_id

    for record in seed.get('attendance', []):
        student_id = reassigned.get(record['student_id'], record['student_id'])
        store.record_attendance(student_id, record['course_code'], record['date'], record['present'])
        counts['attendance'] += 1

    for mark in seed.get('marks', []):
        student_id = reassigned.get(mark['student_id'], mark['student_id'])
        store.record_mark(student_id, mark['course_code'], mark['marks'])
        counts['marks'] += 1

    logger.info(
        "Seeded %(courses)d courses, %(students)d students, %(attendance)d attendance records, %(marks)d marks",
        counts
    )
    return counts


def load_seed_file(store, path):
    """Load seed data from a JSON file shaped like DEFAULT_SEED"""
    with open(path, encoding='utf-8') as handle:
        seed = json.load(handle)
    return load_seed_data(store, seed)


if __name__ == '__main__':
    from app import create_app
    from config import DevelopmentConfig
    from services.record_store import RecordStore
    from services.reporting_service import ReportingService

    app = create_app(DevelopmentConfig)
    with app.app_context():
        report = ReportingService(RecordStore.from_app(app)).get_department_report('Computer Science')
        print(json.dumps(report, indent=2))
