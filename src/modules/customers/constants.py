"""Customer domain constants.

Format rules shared by the value objects and the aggregate.  Kept free of
Django imports so the domain layer can be used without a configured project.
"""

from enum import StrEnum


class DocumentType(StrEnum):
    """Document types with a known length rule.

    Any other type string is accepted as-is and skips the length check.
    """

    CPF = "CPF"
    CNPJ = "CNPJ"


DOCUMENT_LENGTHS: dict[str, int] = {
    DocumentType.CPF: 11,
    DocumentType.CNPJ: 14,
}

MIN_NAME_LENGTH = 3

AREA_CODE_LENGTH = 2
PHONE_NUMBER_MIN_LENGTH = 8
PHONE_NUMBER_MAX_LENGTH = 9

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Upper bounds match the column sizes in ``models.py``.
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 254
DOCUMENT_NUMBER_MAX_LENGTH = 64
DOCUMENT_TYPE_MAX_LENGTH = 20
ADDRESS_MAX_LENGTHS: dict[str, int] = {
    "street": 255,
    "number": 20,
    "complement": 255,
    "city": 120,
    "state": 60,
    "zip_code": 20,
    "country": 60,
}
