"""
Unit tests for course and department reporting
"""

import unittest
from io import BytesIO

import openpyxl

from services.excel_export_service import ExcelExportService
from services.reporting_service import ReportingService
from tests.base import StoreTestCase, make_student


class TestReportingService(StoreTestCase):

    def setUp(self):
        super().setUp()
        self.reporting = ReportingService(self.store)
        self.alice = self.store.add_student(make_student('RA001'))
        self.bob = self.store.add_student(make_student('RA002', name='Bob Stone'))
        self.cara = self.store.add_student(make_student('RA003', name='Cara Lee'))

    def test_course_performance_example(self):
        """Marks 45, 50, 42 out of 60"""
        self.store.record_mark(self.alice, 'CS101', 45)
        self.store.record_mark(self.bob, 'CS101', 50)
        self.store.record_mark(self.cara, 'CS101', 42)

        summary = self.reporting.get_course_performance_summary('CS101')

        self.assertEqual(summary['total_students'], 3)
        self.assertEqual(round(summary['average_marks'], 2), 45.67)
        self.assertEqual(summary['grade_distribution'], {'S': 0, 'A': 1, 'B': 2, 'C': 0, 'D': 0, 'F': 0})
        self.assertEqual(summary['pass_count'], 3)
        self.assertEqual(summary['pass_rate'], 100)

    def test_missing_marks_count_as_zero(self):
        self.store.record_mark(self.alice, 'CS101', 60)

        summary = self.reporting.get_course_performance_summary('CS101')

        self.assertEqual(summary['average_marks'], 20)
        self.assertEqual(summary['grade_distribution']['F'], 2)
        self.assertAlmostEqual(summary['pass_rate'], 100 / 3)

    def test_course_attendance_summary(self):
        for _ in range(40):
            self.store.record_attendance(self.alice, 'CS101', '2025-04-01', True)
        for _ in range(20):
            self.store.record_attendance(self.bob, 'CS101', '2025-04-01', True)

        summary = self.reporting.get_course_attendance_summary('CS101')

        self.assertEqual(summary['total_students'], 3)
        self.assertEqual(summary['average_attendance'], (80 + 40 + 0) / 3)
        self.assertEqual(summary['students_at_risk'], 2)
        self.assertAlmostEqual(summary['detention_rate'], 200 / 3)

    def test_empty_cohort_is_all_zero(self):
        attendance = self.reporting.get_course_attendance_summary('EE101')
        performance = self.reporting.get_course_performance_summary('EE101')

        self.assertEqual(attendance['total_students'], 0)
        self.assertEqual(attendance['average_attendance'], 0)
        self.assertEqual(attendance['detention_rate'], 0)
        self.assertEqual(performance['average_marks'], 0)
        self.assertEqual(performance['average_percentage'], 0)
        self.assertEqual(performance['pass_rate'], 0)
        self.assertEqual(sum(performance['grade_distribution'].values()), 0)

    def test_course_report_rows(self):
        self.store.record_mark(self.alice, 'CS101', 54)
        report = self.reporting.get_course_report('CS101')

        self.assertEqual(report['course']['code'], 'CS101')
        self.assertEqual(len(report['students']), 3)
        alice_row = next(row for row in report['students'] if row['id'] == self.alice)
        self.assertEqual(alice_row['grade'], 'S')
        self.assertTrue(alice_row['detained'])

    def test_unknown_course_report(self):
        report = self.reporting.get_course_report('XX999')
        self.assertIsNone(report['course'])
        self.assertEqual(report['students'], [])
        self.assertEqual(report['attendance']['average_attendance'], 0)

    def test_department_at_risk_is_sum_of_courses(self):
        """A student at risk in two courses counts twice"""
        for _ in range(40):
            self.store.record_attendance(self.bob, 'CS101', '2025-04-01', True)
            self.store.record_attendance(self.cara, 'CS101', '2025-04-01', True)
            self.store.record_attendance(self.bob, 'CS205', '2025-04-01', True)
            self.store.record_attendance(self.cara, 'CS205', '2025-04-01', True)

        report = self.reporting.get_department_report('Computer Science')

        self.assertEqual(report['total_students'], 3)
        self.assertEqual(report['total_courses'], 2)
        per_course = [summary['students_at_risk'] for summary in report['attendance']]
        self.assertEqual(per_course, [1, 1])
        self.assertEqual(report['students_at_risk'], 2)

    def test_department_averages(self):
        self.store.record_mark(self.alice, 'CS101', 60)
        self.store.record_mark(self.bob, 'CS101', 60)
        self.store.record_mark(self.cara, 'CS101', 60)

        report = self.reporting.get_department_report('Computer Science')

        self.assertEqual(report['average_pass_rate'], 50)

    def test_unknown_department(self):
        report = self.reporting.get_department_report('History')
        self.assertEqual(report['total_students'], 0)
        self.assertEqual(report['students_at_risk'], 0)
        self.assertEqual(report['average_attendance'], 0)
        self.assertEqual(report['average_pass_rate'], 0)

    def test_removed_student_leaves_reports(self):
        self.store.record_mark(self.alice, 'CS101', 60)
        self.store.remove_student(self.alice)

        report = self.reporting.get_course_report('CS101')

        self.assertNotIn(self.alice, [row['id'] for row in report['students']])
        self.assertEqual(report['performance']['total_students'], 2)

    def test_student_overview(self):
        for _ in range(50):
            self.store.record_attendance(self.alice, 'CS101', '2025-04-01', True)
        self.store.record_mark(self.alice, 'CS101', 30)
        self.store.record_mark(self.alice, 'CS205', 60)

        overview = self.reporting.get_student_overview(self.alice)

        self.assertEqual(overview['student']['id'], self.alice)
        self.assertEqual(overview['total_courses'], 2)
        self.assertEqual(overview['overall_attendance'], 50)
        self.assertEqual(overview['overall_marks_percentage'], 75)
        self.assertEqual(overview['detained_courses'], 1)

    def test_unknown_student_overview(self):
        overview = self.reporting.get_student_overview('S999')
        self.assertIsNone(overview['student'])
        self.assertEqual(overview['overall_attendance'], 0)
        self.assertEqual(overview['overall_marks_percentage'], 0)

    def test_faculty_overview(self):
        overview = self.reporting.get_faculty_overview('F001')

        self.assertEqual(overview['total_courses'], 2)
        self.assertEqual(overview['total_students'], 3)
        self.assertEqual([c['total_students'] for c in overview['courses']], [3, 3])


class TestExcelExportService(StoreTestCase):

    def setUp(self):
        super().setUp()
        self.reporting = ReportingService(self.store)
        student_id = self.store.add_student(make_student('RA001'))
        self.store.record_mark(student_id, 'CS101', 45)
        self.store.record_attendance(student_id, 'CS101', '2025-04-01', True)

    def _reload(self, workbook):
        return openpyxl.load_workbook(BytesIO(ExcelExportService.workbook_to_bytes(workbook).getvalue()))

    def test_export_course_report(self):
        workbook = ExcelExportService.export_course_report(self.reporting.get_course_report('CS101'))
        reloaded = self._reload(workbook)

        ws = reloaded['Course Report']
        values = [cell.value for row in ws.iter_rows() for cell in row if cell.value is not None]
        self.assertIn('RA001', values)
        self.assertIn('Registration Number', values)

    def test_export_department_report(self):
        workbook = ExcelExportService.export_department_report(
            self.reporting.get_department_report('Computer Science')
        )
        reloaded = self._reload(workbook)

        self.assertEqual(reloaded.sheetnames, ['Summary', 'Attendance', 'Performance'])
        self.assertEqual(reloaded['Attendance'].cell(row=2, column=1).value, 'CS101')
        self.assertEqual(reloaded['Performance'].cell(row=1, column=7).value, 'S')

    def test_format_number(self):
        self.assertEqual(ExcelExportService.format_number(34.0), 34)
        self.assertEqual(ExcelExportService.format_number(45.6666), 45.67)
        self.assertIsNone(ExcelExportService.format_number(None))


if __name__ == '__main__':
    unittest.main()
