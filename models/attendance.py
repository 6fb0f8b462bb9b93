"""
Attendance model for the Department Records service
"""

from database import db
from datetime import datetime, date


class AttendanceRecord(db.Model):
    """One attendance event for a student in a course.

    The table is an append-only log: several rows may exist for the same
    student, course and date, and no foreign key ties a row to a known
    student or course.
    """
    __tablename__ = 'attendance_record'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(20), nullable=False, index=True)
    course_code = db.Column(db.String(20), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, default=date.today)
    present = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def status(self):
        return 'present' if self.present else 'absent'

    def is_present(self):
        """Check if student was present"""
        return bool(self.present)

    def to_dict(self):
        """Convert attendance record to dictionary"""
        return {
            'id': self.id,
            'student_id': self.student_id,
            'course_code': self.course_code,
            'date': self.date.isoformat() if self.date else None,
            'present': self.is_present(),
            'status': self.status
        }

    def __repr__(self):
        return f'<AttendanceRecord {self.student_id} - {self.course_code} - {self.date} - {self.status}>'
