"""
Domain errors raised by the records store
"""


class RecordsError(Exception):
    """Base class for records store errors"""


class DuplicateRegistrationError(RecordsError):
    """Raised when a student is added with a registration number already in use"""

    def __init__(self, registration_number):
        self.registration_number = registration_number
        super().__init__(f"Registration number {registration_number} already exists")
