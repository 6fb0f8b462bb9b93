"""
Excel export service for the Department Records service
Writes course and department reports to spreadsheets
"""

import logging

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO

from services.grading_service import GRADES

logger = logging.getLogger(__name__)


class ExcelExportService:
    """Service for exporting reports to Excel"""

    @staticmethod
    def create_workbook():
        """Create a new workbook with default styling"""
        return openpyxl.Workbook()

    @staticmethod
    def style_header_row(ws, row_num, columns):
        """Apply styling to header row"""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_num, header in enumerate(columns, 1):
            cell = ws.cell(row=row_num, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    @staticmethod
    def auto_adjust_columns(ws):
        """Auto-adjust column widths"""
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    @staticmethod
    def format_number(value):
        """Format number: whole numbers without decimals, fractional numbers with 2 decimal places."""
        try:
            if value is None:
                return None
            num = float(value)
            if num == int(num):
                return int(num)  # 32.0 -> 32
            else:
                return round(num, 2)  # 32.43 -> 32.43, 32.05 -> 32.05
        except (ValueError, TypeError):
            return value

    @staticmethod
    def set_number(cell, value):
        """Set an integer/float number, right aligned."""
        cell.value = ExcelExportService.format_number(value)
        cell.alignment = Alignment(horizontal="right", vertical="center")
        return cell

    @staticmethod
    def set_percentage(cell, percent_0_to_100):
        """Write a numeric percentage (avoid text with green triangle)."""
        if percent_0_to_100 is None:
            cell.value = None
        else:
            # Convert 65.88 -> 0.6588 and apply percent format
            cell.value = float(percent_0_to_100) / 100.0
            if percent_0_to_100 == int(percent_0_to_100):
                cell.number_format = '0%'
            else:
                cell.number_format = '0.00%'
        cell.alignment = Alignment(horizontal="right", vertical="center")
        return cell

    @staticmethod
    def write_summary_block(ws, row, title, pairs):
        """Write a bold title and (label, value) rows; returns the next free row"""
        ws.cell(row=row, column=1, value=title).font = Font(bold=True)
        row += 1
        for label, value, is_percentage in pairs:
            ws.cell(row=row, column=1, value=label)
            if is_percentage:
                ExcelExportService.set_percentage(ws.cell(row=row, column=2), value)
            else:
                ExcelExportService.set_number(ws.cell(row=row, column=2), value)
            row += 1
        return row

    @staticmethod
    def export_course_report(report):
        """Export a course report (summaries and per-student rows) to a workbook"""
        wb = ExcelExportService.create_workbook()
        ws = wb.active
        ws.title = "Course Report"

        course = report.get('course') or {}
        attendance = report['attendance']
        performance = report['performance']

        ws.cell(row=1, column=1, value=f"{attendance['course_code']} - {course.get('name') or ''}").font = Font(bold=True, size=14)

        row = ExcelExportService.write_summary_block(ws, 3, "Attendance", [
            ("Total Hours", attendance['total_hours'], False),
            ("Students", attendance['total_students'], False),
            ("Average Attendance", attendance['average_attendance'], True),
            ("Students At Risk", attendance['students_at_risk'], False),
            ("Detention Rate", attendance['detention_rate'], True),
        ])
        row = ExcelExportService.write_summary_block(ws, row + 1, "Performance", [
            ("Average Marks", performance['average_marks'], False),
            ("Average Percentage", performance['average_percentage'], True),
            ("Pass Rate", performance['pass_rate'], True),
        ] + [
            (f"Grade {grade}", performance['grade_distribution'][grade], False) for grade in GRADES
        ])

        row += 1
        headers = ['Student ID', 'Name', 'Registration Number', 'Attended', 'Attendance %',
                   'Detained', 'Marks', 'Marks %', 'Grade', 'Result']
        ExcelExportService.style_header_row(ws, row, headers)
        row += 1

        for student in report['students']:
            ws.cell(row=row, column=1, value=student['id'])
            ws.cell(row=row, column=2, value=student['name'])
            ws.cell(row=row, column=3, value=student['registration_number'])
            ExcelExportService.set_number(ws.cell(row=row, column=4), student['attended_hours'])
            ExcelExportService.set_percentage(ws.cell(row=row, column=5), student['attendance_percentage'])
            ws.cell(row=row, column=6, value="Yes" if student['detained'] else "No")
            ExcelExportService.set_number(ws.cell(row=row, column=7), student['marks'])
            ExcelExportService.set_percentage(ws.cell(row=row, column=8), student['marks_percentage'])
            ws.cell(row=row, column=9, value=student['grade'])
            ws.cell(row=row, column=10, value="Pass" if student['passed'] else "Fail")
            row += 1

        if not report['students']:
            ws.cell(row=row, column=1, value="No data")

        ExcelExportService.auto_adjust_columns(ws)
        logger.info("Exported course report for %s (%d students)", attendance['course_code'], len(report['students']))
        return wb

    @staticmethod
    def export_department_report(report):
        """Export a department report with one attendance and one performance sheet"""
        wb = ExcelExportService.create_workbook()
        ws = wb.active
        ws.title = "Summary"

        ws.cell(row=1, column=1, value=report['department']).font = Font(bold=True, size=14)
        ExcelExportService.write_summary_block(ws, 3, "Department", [
            ("Students", report['total_students'], False),
            ("Courses", report['total_courses'], False),
            ("Students At Risk", report['students_at_risk'], False),
            ("Average Attendance", report['average_attendance'], True),
            ("Average Pass Rate", report['average_pass_rate'], True),
        ])
        ExcelExportService.auto_adjust_columns(ws)

        ws_att = wb.create_sheet("Attendance")
        ExcelExportService.style_header_row(ws_att, 1, [
            'Course', 'Name', 'Students', 'Average Attendance', 'At Risk', 'Detention Rate'
        ])
        for row, summary in enumerate(report['attendance'], 2):
            ws_att.cell(row=row, column=1, value=summary['course_code'])
            ws_att.cell(row=row, column=2, value=summary['course_name'])
            ExcelExportService.set_number(ws_att.cell(row=row, column=3), summary['total_students'])
            ExcelExportService.set_percentage(ws_att.cell(row=row, column=4), summary['average_attendance'])
            ExcelExportService.set_number(ws_att.cell(row=row, column=5), summary['students_at_risk'])
            ExcelExportService.set_percentage(ws_att.cell(row=row, column=6), summary['detention_rate'])
        ExcelExportService.auto_adjust_columns(ws_att)

        ws_perf = wb.create_sheet("Performance")
        ExcelExportService.style_header_row(ws_perf, 1, [
            'Course', 'Name', 'Students', 'Average Marks', 'Average %', 'Pass Rate'
        ] + list(GRADES))
        for row, summary in enumerate(report['performance'], 2):
            ws_perf.cell(row=row, column=1, value=summary['course_code'])
            ws_perf.cell(row=row, column=2, value=summary['course_name'])
            ExcelExportService.set_number(ws_perf.cell(row=row, column=3), summary['total_students'])
            ExcelExportService.set_number(ws_perf.cell(row=row, column=4), summary['average_marks'])
            ExcelExportService.set_percentage(ws_perf.cell(row=row, column=5), summary['average_percentage'])
            ExcelExportService.set_percentage(ws_perf.cell(row=row, column=6), summary['pass_rate'])
            for offset, grade in enumerate(GRADES):
                ExcelExportService.set_number(ws_perf.cell(row=row, column=7 + offset), summary['grade_distribution'][grade])
        ExcelExportService.auto_adjust_columns(ws_perf)

        logger.info("Exported department report for %s", report['department'])
        return wb

    @staticmethod
    def workbook_to_bytes(workbook):
        """Convert workbook to bytes for download"""
        output = BytesIO()
        workbook.save(output)
        output.seek(0)
        return output
