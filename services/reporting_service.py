"""
Reporting service for the Department Records service
Rolls attendance and grading figures up across courses and departments
"""

import logging

from services.attendance_service import AttendanceService
from services.grading_service import GradingService

logger = logging.getLogger(__name__)


def _mean(values):
    """Arithmetic mean, 0 for no values"""
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)


def _rate(count, total):
    """count as a percentage of total, 0 when total is 0"""
    if total == 0:
        return 0
    return count / total * 100


class ReportingService:
    """Service for course, department, student and faculty reports"""

    def __init__(self, store, attendance=None, grading=None):
        self.store = store
        self.attendance = attendance or AttendanceService(store)
        self.grading = grading or GradingService(store)

    # ------------------------------------------------------------------
    # Course level
    # ------------------------------------------------------------------

    def get_course_attendance_summary(self, course_code, cohort=None):
        """Average attendance and detention risk across a course cohort"""
        course = self.store.get_course(course_code)
        if cohort is None:
            cohort = self.store.get_students_by_course(course_code)

        rows = [self.attendance.get_course_attendance(student.id, course_code) for student in cohort]
        students_at_risk = len([row for row in rows if row['detained']])

        return {
            'course_code': course_code,
            'course_name': course.name if course else None,
            'total_hours': self.store.get_course_total_hours(course_code),
            'total_students': len(rows),
            'average_attendance': _mean(row['percentage'] for row in rows),
            'students_at_risk': students_at_risk,
            'detention_rate': _rate(students_at_risk, len(rows))
        }

    def get_course_performance_summary(self, course_code, cohort=None):
        """Average marks, grade distribution and pass rate across a course cohort.

        Students without a mark count as 0 marks and grade F.
        """
        course = self.store.get_course(course_code)
        if cohort is None:
            cohort = self.store.get_students_by_course(course_code)

        results = [self.grading.get_course_result(student.id, course_code) for student in cohort]
        grade_distribution = GradingService.empty_distribution()
        for result in results:
            grade_distribution[result['grade']] += 1
        pass_count = len([result for result in results if result['passed']])

        return {
            'course_code': course_code,
            'course_name': course.name if course else None,
            'total_students': len(results),
            'average_marks': _mean(result['marks'] for result in results),
            'average_percentage': _mean(result['percentage'] for result in results),
            'grade_distribution': grade_distribution,
            'pass_count': pass_count,
            'pass_rate': _rate(pass_count, len(results))
        }

    def get_course_report(self, course_code):
        """Attendance and performance summaries plus one row per cohort member"""
        course = self.store.get_course(course_code)
        if course is None:
            logger.debug("get_course_report: unknown course %s", course_code)

        cohort = self.store.get_students_by_course(course_code)
        students = []
        for student in cohort:
            attendance = self.attendance.get_course_attendance(student.id, course_code)
            result = self.grading.get_course_result(student.id, course_code)
            students.append({
                'id': student.id,
                'name': student.name,
                'registration_number': student.registration_number,
                'attended_hours': attendance['attended_hours'],
                'attendance_percentage': attendance['percentage'],
                'detained': attendance['detained'],
                'marks': result['marks'],
                'marks_percentage': result['percentage'],
                'grade': result['grade'],
                'passed': result['passed']
            })

        return {
            'course': course.to_dict() if course else None,
            'attendance': self.get_course_attendance_summary(course_code, cohort),
            'performance': self.get_course_performance_summary(course_code, cohort),
            'students': students
        }

    # ------------------------------------------------------------------
    # Department level
    # ------------------------------------------------------------------

    def get_department_report(self, department):
        """Per-course summaries and totals for a department.

        students_at_risk is the sum of course-level counts, so a student at
        risk in two courses is counted twice.
        """
        courses = self.store.get_department_courses(department)
        students = self.store.get_department_students(department)

        attendance = [self.get_course_attendance_summary(course.code) for course in courses]
        performance = [self.get_course_performance_summary(course.code) for course in courses]

        return {
            'department': department,
            'total_students': len(students),
            'total_courses': len(courses),
            'students_at_risk': sum(summary['students_at_risk'] for summary in attendance),
            'average_attendance': _mean(summary['average_attendance'] for summary in attendance),
            'average_pass_rate': _mean(summary['pass_rate'] for summary in performance),
            'attendance': attendance,
            'performance': performance
        }

    # ------------------------------------------------------------------
    # Dashboards
    # ------------------------------------------------------------------

    def get_student_overview(self, student_id):
        """Overall attendance and marks of one student across their courses"""
        student = self.store.get_student(student_id)
        attendance_rows = self.attendance.get_student_attendance_summary(student_id)
        results = self.grading.get_student_results(student_id)

        return {
            'student': student.to_dict() if student else None,
            'total_courses': len(attendance_rows),
            'overall_attendance': _mean(row['percentage'] for row in attendance_rows),
            'overall_marks_percentage': _mean(result['percentage'] for result in results),
            'detained_courses': len([row for row in attendance_rows if row['detained']]),
            'attendance': attendance_rows,
            'results': results
        }

    def get_faculty_overview(self, faculty_id):
        """Courses taught by a faculty member and the distinct students they reach"""
        courses = []
        unique_students = set()
        for course in self.store.get_faculty_courses(faculty_id):
            cohort = self.store.get_students_by_course(course.code)
            unique_students.update(student.id for student in cohort)
            entry = course.to_dict()
            entry['total_students'] = len(cohort)
            courses.append(entry)

        return {
            'faculty_id': faculty_id,
            'total_courses': len(courses),
            'total_students': len(unique_students),
            'courses': courses
        }
