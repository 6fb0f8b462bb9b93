"""
Management (head of department) routes for the Department Records service
Student roster maintenance and department analysis
"""

from flask import Blueprint, jsonify, request, send_file, current_app

from services.errors import DuplicateRegistrationError
from services.excel_export_service import ExcelExportService
from utils.api_helpers import get_store, get_reporting, error_response, get_json_payload
from utils.decorators import view_required
from utils.validators import validate_student_data

management_bp = Blueprint('management', __name__)


@management_bp.route('/students', methods=['GET'])
@view_required('manage_students')
def students():
    """List students, optionally filtered by a search query or department"""
    store = get_store()
    search = request.args.get('search', '').strip()
    department = request.args.get('department', '').strip()

    if search:
        students_list = store.search_students(search)
        if department:
            students_list = [student for student in students_list if student.department == department]
    elif department:
        students_list = store.get_department_students(department)
    else:
        students_list = store.list_students()

    return jsonify({'students': [student.to_dict() for student in students_list]})


@management_bp.route('/students', methods=['POST'])
@view_required('manage_students')
def add_student():
    """Add a student"""
    data = get_json_payload()

    is_valid, message = validate_student_data(data)
    if not is_valid:
        return error_response(message)

    try:
        student_id = get_store().add_student(data)
    except DuplicateRegistrationError as e:
        current_app.logger.info("Rejected student add: %s", e)
        return error_response(str(e), 409)

    return jsonify({'success': True, 'message': 'Student added successfully', 'id': student_id}), 201


@management_bp.route('/students/<student_id>', methods=['DELETE'])
@view_required('manage_students')
def remove_student(student_id):
    """Remove a student with all attendance and marks"""
    removed = get_store().remove_student(student_id)
    message = 'Student removed successfully' if removed else 'Student not found, nothing removed'
    return jsonify({'success': True, 'removed': removed, 'message': message})


@management_bp.route('/departments/<department>/report', methods=['GET'])
@view_required('department_analysis')
def department_report(department):
    """Department-wide attendance and performance rollup"""
    return jsonify(get_reporting().get_department_report(department))


@management_bp.route('/departments/<department>/report/excel', methods=['GET'])
@view_required('department_analysis')
def department_report_excel(department):
    """Download the department report as a spreadsheet"""
    report = get_reporting().get_department_report(department)
    workbook = ExcelExportService.export_department_report(report)
    filename = f"{department.replace(' ', '_')}_department_report.xlsx"
    return send_file(
        ExcelExportService.workbook_to_bytes(workbook),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=filename
    )
