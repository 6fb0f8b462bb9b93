"""
Marks and grading analytics for the Department Records service
"""

from models.marks import Mark

PASS_PERCENTAGE = 50

# Lower bounds are inclusive, checked from the top
GRADE_BANDS = (
    (90, 'S'),
    (80, 'A'),
    (70, 'B'),
    (60, 'C'),
    (50, 'D'),
)
FAIL_GRADE = 'F'
GRADES = tuple(grade for _, grade in GRADE_BANDS) + (FAIL_GRADE,)


class GradingService:
    """Percentage, grade and pass/fail per student and course"""

    def __init__(self, store):
        self.store = store

    @staticmethod
    def calculate_percentage(marks):
        return marks * 100 / Mark.MAX_MARKS

    @staticmethod
    def calculate_grade(percentage):
        """Calculate grade based on percentage"""
        for lower_bound, grade in GRADE_BANDS:
            if percentage >= lower_bound:
                return grade
        return FAIL_GRADE

    @staticmethod
    def is_passing(percentage):
        return percentage >= PASS_PERCENTAGE

    @staticmethod
    def empty_distribution():
        """Zero count for every grade band"""
        return {grade: 0 for grade in GRADES}

    @staticmethod
    def build_result(student_id, course_code, mark):
        """Result row for a mark, or the explicit zero row when there is none"""
        marks = mark.marks if mark is not None else 0
        percentage = GradingService.calculate_percentage(marks)
        return {
            'student_id': student_id,
            'course_code': course_code,
            'marks': marks,
            'max_marks': Mark.MAX_MARKS,
            'has_mark': mark is not None,
            'percentage': percentage,
            'grade': GradingService.calculate_grade(percentage),
            'passed': GradingService.is_passing(percentage)
        }

    def get_course_result(self, student_id, course_code):
        return self.build_result(
            student_id, course_code, self.store.get_student_mark(student_id, course_code)
        )

    def get_student_results(self, student_id):
        """Left join of the student's courses against their marks"""
        marks_by_course = {mark.course_code: mark for mark in self.store.get_student_marks(student_id)}
        results = []
        for course in self.store.get_student_courses(student_id):
            result = self.build_result(student_id, course.code, marks_by_course.get(course.code))
            result['course_name'] = course.name
            results.append(result)
        return results

    def get_course_results(self, course_code):
        """Left join of the course cohort against marks for the course"""
        results = []
        for student in self.store.get_students_by_course(course_code):
            result = self.get_course_result(student.id, course_code)
            result['student_name'] = student.name
            result['registration_number'] = student.registration_number
            results.append(result)
        return results

    def get_student_grade_distribution(self, student_id):
        """How many of the student's courses fall in each grade band"""
        distribution = self.empty_distribution()
        for result in self.get_student_results(student_id):
            distribution[result['grade']] += 1
        return distribution

    def get_student_overall_percentage(self, student_id):
        """Total marks over total possible marks across the student's courses"""
        results = self.get_student_results(student_id)
        max_possible = sum(result['max_marks'] for result in results)
        if max_possible == 0:
            return 0
        return sum(result['marks'] for result in results) * 100 / max_possible
