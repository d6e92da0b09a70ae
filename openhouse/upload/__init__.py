"""
Upload module.

Per-field validation and the upload form's submission state machine.
"""

from openhouse.upload.validators import (
    DEPARTMENTS,
    FIELD_ORDER,
    FIELD_VALIDATORS,
    FILE_FIELDS,
    IMAGE_FIELDS,
    PDF_FIELDS,
    STARTUP_POTENTIAL_CHOICES,
    TEXT_FIELDS,
    UploadFile,
    count_words,
    validate_field,
)
from openhouse.upload.form import (
    FormState,
    SubmitOutcome,
    SubmitStatus,
    UploadDraft,
    UploadForm,
)

__all__ = [
    "DEPARTMENTS",
    "FIELD_ORDER",
    "FIELD_VALIDATORS",
    "FILE_FIELDS",
    "IMAGE_FIELDS",
    "PDF_FIELDS",
    "STARTUP_POTENTIAL_CHOICES",
    "TEXT_FIELDS",
    "UploadFile",
    "count_words",
    "validate_field",
    "FormState",
    "SubmitOutcome",
    "SubmitStatus",
    "UploadDraft",
    "UploadForm",
]
