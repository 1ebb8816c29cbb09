from dataclasses import dataclass, field

from employee_import.db_models import Employee


@dataclass(frozen=True)
class ImportResult:
    success_count: int = 0
    error_count: int = 0
    error_messages: list[str] = field(default_factory=list)
    imported_employees: list[Employee] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.success_count > 0 and self.error_count == 0

    @classmethod
    def failed(cls, message: str) -> "ImportResult":
        return cls(error_count=1, error_messages=[message])

    def as_payload(self) -> dict[str, object]:
        return {
            "success": self.success,
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "errorMessages": list(self.error_messages),
            "importedEmployees": [employee.as_dict() for employee in self.imported_employees],
        }
