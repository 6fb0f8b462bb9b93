"""
Student routes for the Department Records service
"""

from flask import Blueprint, jsonify

from services.attendance_service import AttendanceService
from services.grading_service import GradingService
from utils.api_helpers import get_store, get_reporting
from utils.decorators import view_required

student_bp = Blueprint('student', __name__)


@student_bp.route('/<student_id>/overview', methods=['GET'])
@view_required('dashboard')
def overview(student_id):
    """Student dashboard figures"""
    return jsonify(get_reporting().get_student_overview(student_id))


@student_bp.route('/<student_id>/attendance', methods=['GET'])
@view_required('attendance')
def attendance(student_id):
    """Attendance status for every course of the student"""
    store = get_store()
    service = AttendanceService(store)
    rows = service.get_student_attendance_summary(student_id)
    for row in rows:
        row['records'] = [
            record.to_dict() for record in store.get_student_attendance(student_id, row['course_code'])
        ]
    return jsonify({
        'student_id': student_id,
        'detention_risk': service.has_detention_risk(student_id),
        'courses': rows
    })


@student_bp.route('/<student_id>/marks', methods=['GET'])
@view_required('marks')
def marks(student_id):
    """Marks, grades and grade distribution for the student's courses"""
    grading = GradingService(get_store())
    return jsonify({
        'student_id': student_id,
        'results': grading.get_student_results(student_id),
        'overall_percentage': grading.get_student_overall_percentage(student_id),
        'grade_distribution': grading.get_student_grade_distribution(student_id)
    })
