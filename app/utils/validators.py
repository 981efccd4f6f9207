from typing import Any, Dict, List

# request field -> Book column
MUTABLE_FIELDS = {
    "title": "title",
    "author": "author",
    "isbn": "isbn",
    "category": "category",
    "publishedYear": "published_year",
    "quantity": "quantity",
    "available": "available",
}
TEXT_FIELDS = ("title", "author", "isbn", "category")
CREATE_FIELDS = ("title", "author", "isbn", "category", "publishedYear", "quantity")
NON_NEGATIVE_FIELDS = ("quantity", "available")
# INTEGER columns are 32-bit on server databases
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1


class BookValidator:
    """Field rules shared by create and partial update."""

    @staticmethod
    def is_missing(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and not value.strip()

    @staticmethod
    def parse_text(field: str, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{field} must be a non-empty string")
        return value.strip()

    @staticmethod
    def parse_int(field: str, value: Any) -> int:
        # form inputs arrive as strings ("5"), json as numbers
        if isinstance(value, bool):
            raise ValueError(f"{field} must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ValueError(f"{field} must be an integer")

    @staticmethod
    def parse_field(field: str, value: Any):
        if field in TEXT_FIELDS:
            return BookValidator.parse_text(field, value)

        number = BookValidator.parse_int(field, value)
        if field in NON_NEGATIVE_FIELDS and number < 0:
            raise ValueError(f"{field} must be a non-negative integer")
        if not INT_MIN <= number <= INT_MAX:
            raise ValueError(f"{field} is out of range")
        return number

    @staticmethod
    def _collect(data: Dict[str, Any], fields, errors: List[str]) -> Dict[str, Any]:
        parsed = {}
        for field in fields:
            try:
                parsed[MUTABLE_FIELDS[field]] = BookValidator.parse_field(field, data[field])
            except ValueError as e:
                errors.append(str(e))
        return parsed

    @staticmethod
    def validate_create(data: Dict[str, Any]):
        """
        return: (columns, errors)
        columns only holds the fields that parsed cleanly.
        """
        errors: List[str] = []
        missing = [f for f in CREATE_FIELDS if BookValidator.is_missing(data.get(f))]
        if missing:
            errors.append(f"Please fill in all fields (missing: {', '.join(missing)})")

        present = [f for f in CREATE_FIELDS if f not in missing]
        return BookValidator._collect(data, present, errors), errors

    @staticmethod
    def validate_update(data: Dict[str, Any]):
        """
        Allow-list: only MUTABLE_FIELDS are read, anything else
        (id, createdAt, addedBy, unknown keys) is ignored.
        """
        errors: List[str] = []
        present = [f for f in MUTABLE_FIELDS if f in data]
        return BookValidator._collect(data, present, errors), errors
