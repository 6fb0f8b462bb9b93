"""
Student model for the Department Records service
"""

from database import db
from datetime import datetime


class Student(db.Model):
    """Student model"""
    __tablename__ = 'student'

    id = db.Column(db.String(20), primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    registration_number = db.Column(db.String(30), unique=True, nullable=False, index=True)
    department = db.Column(db.String(100), nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False, default=1)
    semester = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def matches(self, query):
        """Case-insensitive match on name or registration number"""
        needle = (query or '').strip().lower()
        return needle in self.name.lower() or needle in self.registration_number.lower()

    def to_dict(self):
        """Convert student to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'registration_number': self.registration_number,
            'department': self.department,
            'year': self.year,
            'semester': self.semester
        }

    def __repr__(self):
        return f'<Student {self.registration_number}: {self.name}>'
