"""Lead form type value object."""

from enum import Enum


class FormType(str, Enum):
    """Kind of property form a lead was submitted from."""

    CONDO = "condo"
    LANDED = "landed"
    HDB = "hdb"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "FormType":
        """Map a raw form_type string to a FormType, defaulting to OTHER."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER
