"""
Faculty routes for the Department Records service
Attendance and marks entry plus course reports
"""

from flask import Blueprint, jsonify, request, send_file, current_app

from services.access_service import AccessService
from services.attendance_service import AttendanceService
from services.excel_export_service import ExcelExportService
from services.grading_service import GradingService
from utils.api_helpers import get_store, get_reporting, error_response, get_json_payload
from utils.decorators import view_required, ROLE_HEADER
from utils.validators import validate_course_code, validate_date, validate_marks

faculty_bp = Blueprint('faculty', __name__)


@faculty_bp.route('/<faculty_id>/overview', methods=['GET'])
@view_required('dashboard')
def overview(faculty_id):
    """Faculty dashboard: courses taught and students reached"""
    return jsonify(get_reporting().get_faculty_overview(faculty_id))


@faculty_bp.route('/courses', methods=['GET'])
@view_required('manage_attendance')
def courses():
    """Courses the caller may record attendance and marks for"""
    role = request.headers.get(ROLE_HEADER, '').strip().lower()
    available = AccessService.get_available_courses(
        get_store(),
        role,
        user_id=request.args.get('user_id'),
        department=request.args.get('department')
    )
    return jsonify({'courses': [course.to_dict() for course in available]})


@faculty_bp.route('/courses/<course_code>/students', methods=['GET'])
@view_required('manage_attendance')
def course_students(course_code):
    """Course roster"""
    roster = get_store().get_students_by_course(course_code)
    return jsonify({'course_code': course_code, 'students': [student.to_dict() for student in roster]})


@faculty_bp.route('/courses/<course_code>/attendance', methods=['POST'])
@view_required('manage_attendance')
def record_attendance(course_code):
    """Record one attendance session: {"date": "YYYY-MM-DD", "entries": [{"student_id", "present"}]}"""
    data = get_json_payload()

    is_valid, message = validate_course_code(course_code)
    if not is_valid:
        return error_response(message)

    is_valid, message = validate_date(data.get('date'))
    if not is_valid:
        return error_response(message)

    entries = data.get('entries') or []
    if not entries:
        return error_response('No attendance data provided')

    pairs = []
    for entry in entries:
        if not isinstance(entry, dict) or 'student_id' not in entry:
            return error_response('Each entry needs a student_id')
        present = entry.get('present', True)
        if not isinstance(present, bool):
            return error_response('present must be true or false')
        pairs.append((entry['student_id'], present))

    records = get_store().record_attendance_session(course_code, data['date'], pairs)
    current_app.logger.info("Attendance saved for %s on %s", course_code, data['date'])
    return jsonify({
        'success': True,
        'message': 'Attendance saved successfully',
        'recorded': len(records)
    }), 201


@faculty_bp.route('/courses/<course_code>/attendance/<student_id>', methods=['GET'])
@view_required('manage_attendance')
def student_attendance(course_code, student_id):
    """Attendance rows and summary of one student in a course"""
    return jsonify(AttendanceService(get_store()).get_course_attendance_detail(student_id, course_code))


@faculty_bp.route('/courses/<course_code>/marks', methods=['GET'])
@view_required('manage_marks')
def course_marks(course_code):
    """Marks of every student in the course cohort, unmarked students included"""
    results = GradingService(get_store()).get_course_results(course_code)
    return jsonify({'course_code': course_code, 'results': results})


@faculty_bp.route('/courses/<course_code>/marks', methods=['POST'])
@view_required('manage_marks')
def record_marks(course_code):
    """Save marks: {"entries": [{"student_id", "marks"}]}; values are clamped to 0-60"""
    data = get_json_payload()

    is_valid, message = validate_course_code(course_code)
    if not is_valid:
        return error_response(message)

    entries = data.get('entries') or []
    if not entries:
        return error_response('No marks data provided')

    pairs = []
    for entry in entries:
        if not isinstance(entry, dict) or 'student_id' not in entry:
            return error_response('Each entry needs a student_id')
        is_valid, message = validate_marks(entry.get('marks'))
        if not is_valid:
            return error_response(message)
        pairs.append((entry['student_id'], float(entry['marks'])))

    saved = get_store().record_marks(course_code, pairs)
    return jsonify({
        'success': True,
        'message': 'Marks saved successfully',
        'marks': [mark.to_dict() for mark in saved]
    }), 201


@faculty_bp.route('/courses/<course_code>/report', methods=['GET'])
@view_required('manage_marks')
def course_report(course_code):
    """Course attendance and performance analysis"""
    return jsonify(get_reporting().get_course_report(course_code))


@faculty_bp.route('/courses/<course_code>/report/excel', methods=['GET'])
@view_required('manage_marks')
def course_report_excel(course_code):
    """Download the course report as a spreadsheet"""
    report = get_reporting().get_course_report(course_code)
    workbook = ExcelExportService.export_course_report(report)
    return send_file(
        ExcelExportService.workbook_to_bytes(workbook),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=f"{course_code}_course_report.xlsx"
    )
