"""
Marks model for the Department Records service
"""

import math

from database import db
from datetime import datetime


class Mark(db.Model):
    """Internal assessment mark of a student in a course, out of MAX_MARKS"""
    __tablename__ = 'mark'

    MAX_MARKS = 60

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.String(20), nullable=False, index=True)
    course_code = db.Column(db.String(20), nullable=False, index=True)
    marks = db.Column(db.Float, nullable=False, default=0.0)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One mark per student and course
    __table_args__ = (db.UniqueConstraint('student_id', 'course_code', name='unique_student_course_mark'),)

    @staticmethod
    def clamp(marks):
        """Clamp a raw mark into [0, MAX_MARKS]; NaN is stored as 0"""
        value = float(marks)
        if math.isnan(value):
            return 0.0
        if value < 0:
            return 0.0
        if value > Mark.MAX_MARKS:
            return float(Mark.MAX_MARKS)
        return value

    def update_marks(self, marks):
        """Replace the stored mark with a clamped value"""
        self.marks = Mark.clamp(marks)
        self.updated_at = datetime.utcnow()

    def to_dict(self):
        """Convert mark to dictionary"""
        return {
            'id': self.id,
            'student_id': self.student_id,
            'course_code': self.course_code,
            'marks': self.marks,
            'max_marks': Mark.MAX_MARKS
        }

    def __repr__(self):
        return f'<Mark {self.student_id} - {self.course_code}: {self.marks}/{Mark.MAX_MARKS}>'
