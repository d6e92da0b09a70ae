"""
Project upload form.

State machine:

    EDITING -> VALIDATING -> invalid -> EDITING (errors, focus field)
                          -> valid   -> SUBMITTING -> success -> EDITING (draft cleared)
                                                   -> failure -> EDITING (draft kept)

Field errors are kept per field. Choosing a file validates it at once and
drops it if invalid; submitting re-validates every field concurrently and
only posts the multipart request when all of them pass.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, fields as dataclass_fields
from enum import Enum
from typing import Any, Dict, Optional

from openhouse.api.client import ApiError, OpenHouseClient, UploadResult
from openhouse.auth.session import Session
from openhouse.upload.validators import (
    FIELD_ORDER,
    FILE_FIELDS,
    TEXT_FIELDS,
    UploadFile,
    validate_field,
)

INVALID_FORM_MESSAGE = "Please review the form and fix the highlighted errors."
DEFAULT_SUCCESS_MESSAGE = "Upload successful!"

# Fields that validate as soon as they change (select inputs)
VALIDATE_ON_CHANGE = ("department", "startup_potential")


class FormState(Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


@dataclass
class SubmitStatus:
    """Banner shown above the form; kind is "success", "error" or ""."""
    message: str = ""
    kind: str = ""


@dataclass
class UploadDraft:
    """In-progress upload; every field starts empty."""
    title: str = ""
    abstract: str = ""
    team_details: str = ""
    department: str = ""
    tags: str = ""
    domain: str = ""
    is_software: bool = False
    mentor_name: str = ""
    startup_potential: str = ""
    drive_link: str = ""
    phone_number: str = ""
    methodology: Optional[UploadFile] = None
    result: Optional[UploadFile] = None
    cover_poster: Optional[UploadFile] = None
    pdf_poster: Optional[UploadFile] = None
    
    def value(self, name: str) -> Any:
        return getattr(self, name)
    
    def is_empty(self) -> bool:
        return self == UploadDraft()
    
    def to_fields(self, user_name: str) -> Dict[str, str]:
        """Text parts of the multipart payload, keyed by wire name."""
        return {
            "title": self.title,
            "abstract": self.abstract,
            "team_details": self.team_details,
            "department": self.department,
            "tags": self.tags,
            "domain": self.domain,
            "is_software": "true" if self.is_software else "false",
            "mentor_name": self.mentor_name,
            "startup_potential": self.startup_potential,
            "drive_link": self.drive_link,
            "user_name": user_name,
            "phone_number": self.phone_number,
        }
    
    def to_files(self) -> Dict[str, tuple]:
        """File parts of the multipart payload; unset files are left out."""
        return {
            name: self.value(name).to_part()
            for name in FILE_FIELDS
            if self.value(name) is not None
        }


@dataclass
class SubmitOutcome:
    """
    Result of one submit() call.
    
    Attributes:
        success: True if the project was uploaded.
        status: Status banner after the attempt.
        errors: Field errors after validation.
        focus_field: First field (in form order) with an error, if any.
        submitted: True if the upload request was issued.
        result: Server result on success.
    """
    success: bool
    status: SubmitStatus
    errors: Dict[str, str] = field(default_factory=dict)
    focus_field: Optional[str] = None
    submitted: bool = False
    result: Optional[UploadResult] = None


class UploadForm:
    """
    Upload form bound to a session and an API client.
    
    The draft survives failed submissions so the user can correct it, and
    is reset to empty after a successful one.
    """
    
    def __init__(self, client: OpenHouseClient, session: Session):
        self.client = client
        self.session = session
        self.draft = UploadDraft()
        self.state = FormState.EDITING
        self.status = SubmitStatus()
        self._errors: Dict[str, str] = {}
        # Files turned away by choose_file, kept until the slot changes again
        self._rejected: Dict[str, str] = {}
    
    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)
    
    def error_for(self, name: str) -> Optional[str]:
        return self._errors.get(name)
    
    # =========================================================================
    # Editing
    # =========================================================================
    
    def set_field(self, name: str, value: Any) -> None:
        """
        Change a text/select field or the is_software checkbox.
        
        Clears the field's error; select fields are re-validated at once.
        
        Raises:
            ValueError: If name is not an editable field.
        """
        if name == "is_software":
            self.draft.is_software = bool(value)
            return
        if name not in TEXT_FIELDS:
            raise ValueError(f"Unknown upload field: {name}")
        
        setattr(self.draft, name, "" if value is None else str(value))
        self._errors.pop(name, None)
        if name in VALIDATE_ON_CHANGE:
            self.validate_field(name)
    
    def choose_file(self, name: str, file: Optional[UploadFile]) -> bool:
        """
        Attach (or clear, with None) a file and validate it immediately.
        
        An invalid file is rejected: the slot is cleared and the field keeps
        the error, so submit() refuses to send until the slot is changed again.
        
        Returns:
            True if the slot now holds the file (or was cleared on request).
        
        Raises:
            ValueError: If name is not a file field.
        """
        if name not in FILE_FIELDS:
            raise ValueError(f"Unknown file field: {name}")
        
        self._errors.pop(name, None)
        self._rejected.pop(name, None)
        self.status = SubmitStatus()
        setattr(self.draft, name, file)
        
        if file is None:
            return True
        
        if not self.validate_field(name):
            setattr(self.draft, name, None)
            self._rejected[name] = self._errors[name]
            print(f"[upload] Rejected {file.filename} for {name}: {self._errors[name]}")
            return False
        return True
    
    # =========================================================================
    # Validation
    # =========================================================================
    
    def validate_field(self, name: str) -> bool:
        """Validate one field, recording or clearing its error."""
        error = validate_field(name, self.draft.value(name))
        if error:
            self._errors[name] = error
        else:
            self._errors.pop(name, None)
        return error is None
    
    def validate_all(self) -> bool:
        """
        Validate every field concurrently, replacing all recorded errors.
        
        Rejected file choices stay reported even though their slot is empty.
        
        Returns:
            True if no field has an error.
        """
        values = {name: self.draft.value(name) for name in FIELD_ORDER}
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = pool.map(lambda name: (name, validate_field(name, values[name])), FIELD_ORDER)
            self._errors = {name: error for name, error in results if error}
        for name, error in self._rejected.items():
            self._errors.setdefault(name, error)
        return not self._errors
    
    def first_error_field(self) -> Optional[str]:
        for name in FIELD_ORDER:
            if name in self._errors:
                return name
        return None
    
    # =========================================================================
    # Submission
    # =========================================================================
    
    def submit(self) -> SubmitOutcome:
        """
        Validate everything and, if valid, upload the draft.
        
        Returns:
            SubmitOutcome describing what happened. No request is issued
            when any field is invalid.
        """
        user = self.session.require_user()
        self.status = SubmitStatus()
        self.state = FormState.VALIDATING
        
        if not self.validate_all():
            focus = self.first_error_field()
            print(f"[upload] Validation failed: {', '.join(self._errors)}")
            self.status = SubmitStatus(INVALID_FORM_MESSAGE, "error")
            self.state = FormState.EDITING
            return SubmitOutcome(
                success=False,
                status=self.status,
                errors=self.errors,
                focus_field=focus,
            )
        
        self.state = FormState.SUBMITTING
        try:
            result = self.client.upload_project(
                self.draft.to_fields(user.user_name),
                self.draft.to_files(),
            )
        except ApiError as e:
            print(f"[upload] Submission failed: {e}")
            self.status = SubmitStatus(f"Upload Failed: {e}", "error")
            return SubmitOutcome(success=False, status=self.status, submitted=True)
        finally:
            self.state = FormState.EDITING
        
        self.status = SubmitStatus(result.message or DEFAULT_SUCCESS_MESSAGE, "success")
        self.reset()
        return SubmitOutcome(success=True, status=self.status, submitted=True, result=result)
    
    def reset(self) -> None:
        """Return every field to its initial empty value and clear errors."""
        for f in dataclass_fields(UploadDraft):
            setattr(self.draft, f.name, getattr(UploadDraft(), f.name))
        self._errors = {}
        self._rejected = {}
