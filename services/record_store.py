"""
Records store for the Department Records service
Owns students, courses, attendance records and marks, and applies the
mutation commands that change them
"""

import logging
import threading

from database import db, handle_db_error
from models.student import Student
from models.academic import Course
from models.attendance import AttendanceRecord
from models.marks import Mark
from services.errors import DuplicateRegistrationError
from utils.db_helpers import atomic, next_sequential_id
from utils.sorting_helpers import SortingHelpers
from utils.validators import parse_date

logger = logging.getLogger(__name__)


class RecordStore:
    """Single owner of the department records.

    Commands run one at a time under a write lock, each as a single
    transaction. Lookups never take the lock and always query current state.
    """

    def __init__(self, database=db):
        self.db = database
        self._write_lock = threading.RLock()

    @classmethod
    def from_app(cls, app):
        """Return the store registered on a Flask app"""
        return app.extensions['record_store']

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @handle_db_error
    def add_student(self, data):
        """Add a student and return the assigned id.

        Raises DuplicateRegistrationError if the registration number exists.
        """
        registration_number = str(data['registration_number']).strip()

        with self._write_lock:
            existing = Student.query.filter_by(registration_number=registration_number).first()
            if existing:
                raise DuplicateRegistrationError(registration_number)

            student_id = data.get('id')
            if not student_id or self.db.session.get(Student, student_id) is not None:
                taken = [row.id for row in self.db.session.query(Student.id).all()]
                student_id = next_sequential_id(taken)

            student = Student(
                id=student_id,
                name=str(data['name']).strip(),
                registration_number=registration_number,
                department=str(data['department']).strip(),
                year=int(data.get('year', 1)),
                semester=int(data.get('semester', 1))
            )
            with atomic() as session:
                session.add(student)

        logger.info("Added student %s (%s)", student_id, registration_number)
        return student_id

    @handle_db_error
    def remove_student(self, student_id):
        """Remove a student together with every attendance and mark row.

        Unknown ids are ignored. Returns True when a student was removed.
        """
        with self._write_lock:
            student = self.db.session.get(Student, student_id)
            if student is None:
                logger.debug("remove_student: %s not found, nothing to do", student_id)
                return False

            with atomic() as session:
                attendance_deleted = AttendanceRecord.query.filter_by(
                    student_id=student_id
                ).delete(synchronize_session=False)
                marks_deleted = Mark.query.filter_by(
                    student_id=student_id
                ).delete(synchronize_session=False)
                session.delete(student)

        logger.info(
            "Removed student %s with %d attendance and %d mark records",
            student_id, attendance_deleted, marks_deleted
        )
        return True

    @handle_db_error
    def record_attendance(self, student_id, course_code, date, present):
        """Append one attendance event; no check against known students or courses"""
        with self._write_lock:
            record = AttendanceRecord(
                student_id=student_id,
                course_code=course_code,
                date=parse_date(date),
                present=bool(present)
            )
            with atomic() as session:
                session.add(record)
        return record

    @handle_db_error
    def record_attendance_session(self, course_code, date, entries):
        """Append one attendance event per (student_id, present) entry.

        All entries are written in one transaction.
        """
        session_date = parse_date(date)
        with self._write_lock:
            records = [
                AttendanceRecord(
                    student_id=student_id,
                    course_code=course_code,
                    date=session_date,
                    present=bool(present)
                )
                for student_id, present in entries
            ]
            with atomic() as session:
                session.add_all(records)

        logger.info("Recorded %d attendance entries for %s on %s", len(records), course_code, session_date)
        return records

    def _upsert_mark(self, session, student_id, course_code, marks):
        mark = Mark.query.filter_by(student_id=student_id, course_code=course_code).first()
        if mark:
            mark.update_marks(marks)
        else:
            mark = Mark(student_id=student_id, course_code=course_code, marks=Mark.clamp(marks))
            session.add(mark)
        return mark

    @handle_db_error
    def record_mark(self, student_id, course_code, marks):
        """Clamp marks to [0, 60] and insert or replace the (student, course) row"""
        with self._write_lock:
            with atomic() as session:
                mark = self._upsert_mark(session, student_id, course_code, marks)
        return mark

    @handle_db_error
    def record_marks(self, course_code, entries):
        """Upsert every (student_id, marks) entry for a course in one transaction"""
        with self._write_lock:
            with atomic() as session:
                saved = []
                for student_id, marks in entries:
                    saved.append(self._upsert_mark(session, student_id, course_code, marks))
                    # Flush so a repeated student in the same batch updates its own row
                    session.flush()

        logger.info("Recorded %d marks for %s", len(saved), course_code)
        return saved

    @handle_db_error
    def seed_course(self, data):
        """Insert or replace a course; courses are reference data loaded at startup"""
        with self._write_lock:
            with atomic() as session:
                course = session.get(Course, data['code'])
                if course is None:
                    course = Course(code=data['code'])
                    session.add(course)
                course.name = data['name']
                course.department = data['department']
                course.faculty_id = data['faculty_id']
                course.max_hours = max(0, int(data.get('max_hours', 0)))
        return course

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_student(self, student_id):
        return self.db.session.get(Student, student_id)

    def get_course(self, course_code):
        return self.db.session.get(Course, course_code)

    def list_students(self):
        return SortingHelpers.sort_students(Student.query.all())

    def list_courses(self):
        return SortingHelpers.sort_courses(Course.query.all())

    def search_students(self, query):
        """Students whose name or registration number contains query"""
        return [student for student in self.list_students() if student.matches(query)]

    def get_student_courses(self, student_id):
        """Courses offered by the student's department"""
        student = self.get_student(student_id)
        if student is None:
            logger.debug("get_student_courses: unknown student %s", student_id)
            return []
        return self.get_department_courses(student.department)

    def get_student_attendance(self, student_id, course_code=None):
        """Attendance rows of a student in recording order, optionally for one course"""
        query = AttendanceRecord.query.filter_by(student_id=student_id)
        if course_code:
            query = query.filter_by(course_code=course_code)
        return query.order_by(AttendanceRecord.id.asc()).all()

    def get_student_marks(self, student_id):
        return Mark.query.filter_by(student_id=student_id).order_by(Mark.id.asc()).all()

    def get_student_mark(self, student_id, course_code):
        return Mark.query.filter_by(student_id=student_id, course_code=course_code).first()

    def get_faculty_courses(self, faculty_id):
        return SortingHelpers.sort_courses(Course.query.filter_by(faculty_id=faculty_id).all())

    def get_department_courses(self, department):
        return SortingHelpers.sort_courses(Course.query.filter_by(department=department).all())

    def get_course_total_hours(self, course_code):
        """Total sessions of a course, 0 when the course is unknown"""
        course = self.get_course(course_code)
        return course.max_hours if course else 0

    def get_course_attended_hours(self, student_id, course_code):
        """Count of present rows; duplicate dates are counted, not merged"""
        return AttendanceRecord.query.filter_by(
            student_id=student_id,
            course_code=course_code,
            present=True
        ).count()

    def get_students_by_course(self, course_code):
        """The cohort of a course: every student of the course's department"""
        course = self.get_course(course_code)
        if course is None:
            logger.debug("get_students_by_course: unknown course %s", course_code)
            return []
        return self.get_department_students(course.department)

    def get_department_students(self, department):
        return SortingHelpers.sort_students(Student.query.filter_by(department=department).all())
