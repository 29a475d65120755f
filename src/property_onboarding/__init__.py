"""Property record normalization for the listing and onboarding app.

`normalize` turns a stored record (either storage convention) into the
canonical form model; `serialize` and `prepare_submission` turn the form
model back into a persistence payload.
"""

from .inbound import normalize
from .merge import merge_preserving_existing
from .outbound import SubmissionResult, prepare_submission, serialize, validate_required
from .schema.form import FormModel
from .status import derive_construction_status

__all__ = [
    "FormModel",
    "SubmissionResult",
    "derive_construction_status",
    "merge_preserving_existing",
    "normalize",
    "prepare_submission",
    "serialize",
    "validate_required",
]
