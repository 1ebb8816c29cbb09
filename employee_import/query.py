from dataclasses import dataclass


DEFAULT_SORT_FIELD = "surname"

# Normalised sort key -> Employee attribute.
SORT_FIELDS = {
    "id": "id",
    "payrollnumber": "payroll_number",
    "forenames": "forenames",
    "surname": "surname",
    "dateofbirth": "date_of_birth",
    "telephone": "telephone",
    "mobile": "mobile",
    "address": "address",
    "address2": "address_2",
    "postcode": "postcode",
    "emailhome": "email_home",
    "startdate": "start_date",
}

SEARCH_FIELDS = (
    "payroll_number",
    "forenames",
    "surname",
    "email_home",
    "address",
    "address_2",
    "postcode",
)


@dataclass(frozen=True)
class EmployeeQuery:
    sort_attribute: str = DEFAULT_SORT_FIELD
    descending: bool = False
    search: str | None = None


def normalize_sort_field(sort_field: str | None) -> str:
    key = (sort_field or "").lower()
    for separator in ("_", " ", "-"):
        key = key.replace(separator, "")
    return SORT_FIELDS.get(key, DEFAULT_SORT_FIELD)


def build_query(sort_field: str | None, sort_order: str | None, search: str | None) -> EmployeeQuery:
    search_text = (search or "").strip()
    return EmployeeQuery(
        sort_attribute=normalize_sort_field(sort_field),
        descending=(sort_order or "").strip().lower() == "desc",
        search=search_text or None,
    )
