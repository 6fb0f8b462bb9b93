"""
Role to view mapping for the Department Records service
"""

STUDENT = 'student'
FACULTY = 'faculty'
HOD = 'hod'

ROLE_VIEWS = {
    STUDENT: frozenset({'dashboard', 'attendance', 'marks'}),
    FACULTY: frozenset({'dashboard', 'manage_attendance', 'manage_marks'}),
    HOD: frozenset({
        'dashboard', 'manage_attendance', 'manage_marks',
        'manage_students', 'department_analysis'
    }),
}


class AccessService:
    """Which views a role may open and which courses it works on"""

    @staticmethod
    def get_views(role):
        return ROLE_VIEWS.get(role, frozenset())

    @staticmethod
    def can_access(role, view_name):
        return view_name in AccessService.get_views(role)

    @staticmethod
    def get_available_courses(store, role, user_id=None, department=None):
        """Courses a user may work on.

        hod sees every course of the department (all courses when no
        department is given), faculty sees the courses they own, a student
        sees the courses of their department.
        """
        if role == HOD:
            if department:
                return store.get_department_courses(department)
            return store.list_courses()
        if role == FACULTY:
            return store.get_faculty_courses(user_id) if user_id else []
        if role == STUDENT:
            return store.get_student_courses(user_id) if user_id else []
        return []
