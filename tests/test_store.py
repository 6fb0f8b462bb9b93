"""
Unit tests for the records store
"""

import unittest
from datetime import date
from database import DatabaseError
from models.attendance import AttendanceRecord
from models.marks import Mark
from sample_data import load_seed_data
from services.errors import DuplicateRegistrationError
from tests.base import StoreTestCase, make_student


class TestRecordStore(StoreTestCase):

    def test_add_student_assigns_sequential_ids(self):
        """Ids follow S001, S002 and continue past the highest one in use"""
        first = self.store.add_student(make_student('RA001'))
        second = self.store.add_student(make_student('RA002', name='Bob Stone'))
        self.assertEqual(first, 'S001')
        self.assertEqual(second, 'S002')

        self.store.remove_student('S001')
        third = self.store.add_student(make_student('RA003', name='Cara Lee'))
        self.assertEqual(third, 'S003')

    def test_add_student_keeps_free_explicit_id(self):
        student_id = self.store.add_student(make_student('RA001', id='S010'))
        self.assertEqual(student_id, 'S010')

        # Taken id falls back to the next sequential one
        other_id = self.store.add_student(make_student('RA002', id='S010'))
        self.assertEqual(other_id, 'S011')

    def test_add_student_duplicate_registration(self):
        """Duplicate registration number is rejected without writing"""
        self.store.add_student(make_student('RA001'))

        with self.assertRaises(DuplicateRegistrationError) as ctx:
            self.store.add_student(make_student('RA001', name='Someone Else'))

        self.assertEqual(ctx.exception.registration_number, 'RA001')
        self.assertEqual(len(self.store.list_students()), 1)
        self.assertEqual(self.store.get_student('S001').name, 'Alice Johnson')

    def test_remove_student_cascades(self):
        """Removing a student deletes their attendance and marks"""
        alice = self.store.add_student(make_student('RA001'))
        bob = self.store.add_student(make_student('RA002', name='Bob Stone'))
        self.store.record_attendance(alice, 'CS101', '2025-04-01', True)
        self.store.record_attendance(bob, 'CS101', '2025-04-01', True)
        self.store.record_mark(alice, 'CS101', 45)
        self.store.record_mark(bob, 'CS101', 40)

        self.assertTrue(self.store.remove_student(alice))

        self.assertIsNone(self.store.get_student(alice))
        self.assertEqual(self.store.get_student_attendance(alice), [])
        self.assertEqual(self.store.get_student_marks(alice), [])
        self.assertNotIn(alice, [s.id for s in self.store.get_department_students('Computer Science')])
        self.assertNotIn(alice, [s.id for s in self.store.get_students_by_course('CS101')])
        self.assertEqual(AttendanceRecord.query.filter_by(student_id=alice).count(), 0)
        self.assertEqual(Mark.query.filter_by(student_id=alice).count(), 0)

        # Other students are untouched
        self.assertEqual(len(self.store.get_student_attendance(bob)), 1)
        self.assertEqual(len(self.store.get_student_marks(bob)), 1)

    def test_remove_unknown_student_is_noop(self):
        self.assertFalse(self.store.remove_student('S999'))

    def test_record_attendance_is_permissive(self):
        """Unknown students and courses are still logged"""
        record = self.store.record_attendance('S404', 'XX999', date(2025, 4, 1), False)

        self.assertEqual(record.student_id, 'S404')
        self.assertEqual(len(self.store.get_student_attendance('S404')), 1)

    def test_duplicate_attendance_dates_are_counted(self):
        student_id = self.store.add_student(make_student('RA001'))
        for _ in range(3):
            self.store.record_attendance(student_id, 'CS101', '2025-04-01', True)
        self.store.record_attendance(student_id, 'CS101', '2025-04-02', False)

        self.assertEqual(self.store.get_course_attended_hours(student_id, 'CS101'), 3)
        self.assertEqual(len(self.store.get_student_attendance(student_id, 'CS101')), 4)
        self.assertEqual(len(self.store.get_student_attendance(student_id, 'CS205')), 0)

    def test_record_attendance_session(self):
        alice = self.store.add_student(make_student('RA001'))
        bob = self.store.add_student(make_student('RA002', name='Bob Stone'))

        records = self.store.record_attendance_session('CS101', '2025-04-01', [(alice, True), (bob, False)])

        self.assertEqual(len(records), 2)
        self.assertEqual(self.store.get_course_attended_hours(alice, 'CS101'), 1)
        self.assertEqual(self.store.get_course_attended_hours(bob, 'CS101'), 0)

    def test_record_mark_clamps(self):
        student_id = self.store.add_student(make_student('RA001'))
        self.assertEqual(self.store.record_mark(student_id, 'CS101', 75).marks, 60)
        self.assertEqual(self.store.record_mark(student_id, 'CS205', -3).marks, 0)

    def test_record_mark_replaces(self):
        """A second mark for the same pair replaces the first"""
        student_id = self.store.add_student(make_student('RA001'))
        self.store.record_mark(student_id, 'CS101', 75)
        self.store.record_mark(student_id, 'CS101', 30)

        rows = Mark.query.filter_by(student_id=student_id, course_code='CS101').all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].marks, 30)

    def test_record_mark_same_value_replay(self):
        student_id = self.store.add_student(make_student('RA001'))
        self.store.record_mark(student_id, 'CS101', 42)
        self.store.record_mark(student_id, 'CS101', 42)

        rows = Mark.query.filter_by(student_id=student_id, course_code='CS101').all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].marks, 42)

    def test_record_marks_batch(self):
        alice = self.store.add_student(make_student('RA001'))
        bob = self.store.add_student(make_student('RA002', name='Bob Stone'))

        self.store.record_marks('CS101', [(alice, 50), (bob, 20), (alice, 55)])

        self.assertEqual(Mark.query.filter_by(course_code='CS101').count(), 2)
        self.assertEqual(self.store.get_student_mark(alice, 'CS101').marks, 55)
        self.assertEqual(self.store.get_student_mark(bob, 'CS101').marks, 20)

    def test_record_mark_nan_stored_as_zero(self):
        student_id = self.store.add_student(make_student('RA001'))
        self.assertEqual(self.store.record_mark(student_id, 'CS101', 'nan').marks, 0)
        self.assertEqual(self.store.record_mark(student_id, 'CS205', float('inf')).marks, 60)

    def test_load_seed_data_follows_reassigned_id(self):
        """Seed rows of a student whose id was taken attach to the new id"""
        self.store.add_student(make_student('RA001', id='S001'))
        seed = {
            'students': [make_student('RA002', name='Bob Stone', id='S001')],
            'attendance': [{'student_id': 'S001', 'course_code': 'CS101', 'date': '2025-04-01', 'present': True}],
            'marks': [{'student_id': 'S001', 'course_code': 'CS101', 'marks': 40}],
        }

        with self.assertLogs('sample_data', level='WARNING'):
            counts = load_seed_data(self.store, seed)

        self.assertEqual(counts['students'], 1)
        self.assertEqual(self.store.get_student('S002').registration_number, 'RA002')
        self.assertEqual(self.store.get_student_mark('S002', 'CS101').marks, 40)
        self.assertEqual(self.store.get_course_attended_hours('S002', 'CS101'), 1)
        self.assertIsNone(self.store.get_student_mark('S001', 'CS101'))
        self.assertEqual(self.store.get_course_attended_hours('S001', 'CS101'), 0)

    def test_lookups(self):
        alice = self.store.add_student(make_student('RA001'))
        self.store.add_student(make_student('EE001', name='Eve Volt', department='Electrical'))

        self.assertEqual([c.code for c in self.store.get_faculty_courses('F001')], ['CS101', 'CS205'])
        self.assertEqual([c.code for c in self.store.get_student_courses(alice)], ['CS101', 'CS205'])
        self.assertEqual([s.id for s in self.store.get_students_by_course('EE101')], ['S002'])
        self.assertEqual(self.store.get_course_total_hours('CS205'), 40)
        self.assertEqual([s.registration_number for s in self.store.search_students('eve')], ['EE001'])
        self.assertEqual(len(self.store.search_students('ra0')), 1)

    def test_unknown_lookups_return_empty(self):
        self.assertIsNone(self.store.get_student('S999'))
        self.assertIsNone(self.store.get_course('XX999'))
        self.assertEqual(self.store.get_student_courses('S999'), [])
        self.assertEqual(self.store.get_students_by_course('XX999'), [])
        self.assertEqual(self.store.get_course_total_hours('XX999'), 0)
        self.assertEqual(self.store.get_course_attended_hours('S999', 'CS101'), 0)
        self.assertEqual(self.store.get_faculty_courses('F999'), [])

    def test_database_failure_is_wrapped_and_rolled_back(self):
        with self.assertRaises(DatabaseError):
            self.store.seed_course({'code': 'CS999', 'name': None,
                                    'department': 'Computer Science', 'faculty_id': 'F001'})

        self.assertIsNone(self.store.get_course('CS999'))
        self.assertEqual(len(self.store.list_courses()), 3)

    def test_seed_course_replaces(self):
        self.store.seed_course({'code': 'CS101', 'name': 'Programming I',
                                'department': 'Computer Science', 'faculty_id': 'F003', 'max_hours': 45})

        course = self.store.get_course('CS101')
        self.assertEqual(course.name, 'Programming I')
        self.assertEqual(course.max_hours, 45)
        self.assertEqual(len(self.store.list_courses()), 3)


if __name__ == '__main__':
    unittest.main()
