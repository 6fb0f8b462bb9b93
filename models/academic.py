"""
Academic structure model for the Department Records service
"""

from database import db


class Course(db.Model):
    """Course taught in a department by one faculty member"""
    __tablename__ = 'course'

    code = db.Column(db.String(20), primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    department = db.Column(db.String(100), nullable=False, index=True)
    faculty_id = db.Column(db.String(20), nullable=False, index=True)
    max_hours = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        """Convert course to dictionary"""
        return {
            'code': self.code,
            'name': self.name,
            'department': self.department,
            'faculty_id': self.faculty_id,
            'max_hours': self.max_hours
        }

    def __repr__(self):
        return f'<Course {self.code}: {self.name}>'
