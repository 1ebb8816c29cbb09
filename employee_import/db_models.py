from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# Default for date fields that were never set or could not be parsed.
ZERO_DATE = date.min

STRING_FIELDS = (
    "payroll_number",
    "forenames",
    "surname",
    "telephone",
    "mobile",
    "address",
    "address_2",
    "postcode",
    "email_home",
)
DATE_FIELDS = ("date_of_birth", "start_date")
EMPLOYEE_FIELDS = (
    "payroll_number",
    "forenames",
    "surname",
    "date_of_birth",
    "telephone",
    "mobile",
    "address",
    "address_2",
    "postcode",
    "email_home",
    "start_date",
)


class Base(DeclarativeBase):
    pass


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payroll_number: Mapped[str] = mapped_column(String(50))
    forenames: Mapped[str] = mapped_column(String(100))
    surname: Mapped[str] = mapped_column(String(100), index=True)
    date_of_birth: Mapped[date] = mapped_column(Date)
    telephone: Mapped[str | None] = mapped_column(String(20), nullable=True, default="")
    mobile: Mapped[str | None] = mapped_column(String(20), nullable=True, default="")
    address: Mapped[str | None] = mapped_column(String(200), nullable=True, default="")
    address_2: Mapped[str | None] = mapped_column(String(200), nullable=True, default="")
    postcode: Mapped[str | None] = mapped_column(String(20), nullable=True, default="")
    email_home: Mapped[str | None] = mapped_column(String(100), nullable=True, default="")
    start_date: Mapped[date] = mapped_column(Date)

    def field_values(self) -> dict[str, object]:
        return {name: getattr(self, name) for name in EMPLOYEE_FIELDS}

    def as_dict(self) -> dict[str, object]:
        """Grid payload with camelCase keys and ISO dates."""
        return {
            "id": self.id,
            "payrollNumber": self.payroll_number,
            "forenames": self.forenames,
            "surname": self.surname,
            "dateOfBirth": _iso(self.date_of_birth),
            "telephone": self.telephone,
            "mobile": self.mobile,
            "address": self.address,
            "address2": self.address_2,
            "postcode": self.postcode,
            "emailHome": self.email_home,
            "startDate": _iso(self.start_date),
        }

    def __repr__(self) -> str:
        return f"Employee(id={self.id!r}, payroll_number={self.payroll_number!r}, surname={self.surname!r})"


def blank_employee_values() -> dict[str, object]:
    values: dict[str, object] = {name: "" for name in STRING_FIELDS}
    values.update({name: ZERO_DATE for name in DATE_FIELDS})
    return values


def _iso(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
