"""
Attendance analytics for the Department Records service
Per student and course attendance figures and detention risk
"""

import math

ATTENDANCE_THRESHOLD = 75  # Minimum attendance percentage
REQUIRED_ATTENDANCE_RATIO = 0.75


class AttendanceService:
    """Read-side attendance figures computed from the records store"""

    def __init__(self, store):
        self.store = store

    @staticmethod
    def calculate_percentage(attended_hours, total_hours):
        """Attendance percentage; a course with no hours gives 0"""
        if total_hours > 0:
            return attended_hours * 100 / total_hours
        return 0

    @staticmethod
    def calculate_required_attendance(total_hours):
        """Sessions a student must attend to stay at or above the threshold"""
        return math.ceil(REQUIRED_ATTENDANCE_RATIO * total_hours)

    @staticmethod
    def is_detained(percentage):
        return percentage < ATTENDANCE_THRESHOLD

    @staticmethod
    def build_summary(attended_hours, total_hours):
        """Attendance figures from raw counts.

        absent_hours is total minus attended and goes negative when more
        present sessions were recorded than the course has.
        """
        percentage = AttendanceService.calculate_percentage(attended_hours, total_hours)
        required_attendance = AttendanceService.calculate_required_attendance(total_hours)
        return {
            'attended_hours': attended_hours,
            'total_hours': total_hours,
            'absent_hours': total_hours - attended_hours,
            'percentage': percentage,
            'detained': AttendanceService.is_detained(percentage),
            'required_attendance': required_attendance,
            'can_miss_more': max(0, attended_hours - required_attendance)
        }

    def get_course_attendance(self, student_id, course_code):
        """Attendance summary of one student in one course"""
        summary = self.build_summary(
            self.store.get_course_attended_hours(student_id, course_code),
            self.store.get_course_total_hours(course_code)
        )
        summary['student_id'] = student_id
        summary['course_code'] = course_code
        return summary

    def get_course_attendance_detail(self, student_id, course_code):
        """Attendance summary plus the raw attendance rows behind it"""
        summary = self.get_course_attendance(student_id, course_code)
        summary['records'] = [
            record.to_dict()
            for record in self.store.get_student_attendance(student_id, course_code)
        ]
        return summary

    def get_student_attendance_summary(self, student_id):
        """One attendance row per course of the student"""
        rows = []
        for course in self.store.get_student_courses(student_id):
            row = self.get_course_attendance(student_id, course.code)
            row['course_name'] = course.name
            rows.append(row)
        return rows

    def has_detention_risk(self, student_id):
        """True when the student is below threshold in any course"""
        return any(row['detained'] for row in self.get_student_attendance_summary(student_id))
