"""Errors raised by the employee import application."""


class EmployeeImportError(Exception):
    """Base exception for the application."""


class ParsingError(EmployeeImportError):
    """The import file could not be turned into employee records."""


class NotFoundError(EmployeeImportError):
    """No employee exists with the requested identifier."""

    def __init__(self, employee_id: int | None) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee with ID {employee_id} not found")


class ValidationError(EmployeeImportError):
    """An employee failed field validation."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))
