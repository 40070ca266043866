"""
Error taxonomy of the /parse-swagger pipeline.

Every failed request ends in exactly one ``Outcome``. An outcome carries its
category, the HTTP status code and the message template shown to the caller.
"""
from enum import Enum

REDACTED_DETAIL = "unexpected error while processing the document"


class Category(str, Enum):
    REJECTED_INPUT = "Rejected-Input"
    MALFORMED_INPUT = "Malformed-Input"
    UNSUPPORTED_VERSION = "Unsupported-Version"
    INVALID_DOCUMENT = "Invalid-Document"
    INTERNAL_FAULT = "Internal-Fault"


class Outcome(Enum):
    NO_FILE_PROVIDED = (
        Category.REJECTED_INPUT,
        415,
        "Bad Request: No file uploaded or invalid file type. Only JSON and YAML files are allowed.",
    )
    INVALID_FILE_TYPE = (
        Category.REJECTED_INPUT,
        400,
        "Bad Request: Invalid file type. Only JSON and YAML files are allowed.",
    )
    MALFORMED_UPLOAD = (
        Category.REJECTED_INPUT,
        400,
        "Bad Request: Malformed upload: {detail}",
    )
    MALFORMED_INPUT = (
        Category.MALFORMED_INPUT,
        400,
        "Bad Request: Invalid JSON/YAML syntax: {detail}",
    )
    UNSUPPORTED_VERSION = (
        Category.UNSUPPORTED_VERSION,
        415,
        "Unsupported Media Type: Unsupported Swagger/OpenAPI version: {detail}",
    )
    INVALID_DOCUMENT = (
        Category.INVALID_DOCUMENT,
        422,
        "Unprocessable Entity: Invalid Swagger/OpenAPI document: {detail}",
    )
    INTERNAL_FAULT = (
        Category.INTERNAL_FAULT,
        500,
        "Internal Server Error: {detail}",
    )

    def __init__(self, category: Category, status_code: int, template: str):
        self.category = category
        self.status_code = status_code
        self.template = template

    def render(self, detail: str = "") -> str:
        return self.template.format(detail=detail)


class FailureKind(str, Enum):
    """Kinds of failure reported by the document validator."""

    SYNTAX_ERROR = "SyntaxError"
    UNSUPPORTED_VERSION = "UnsupportedVersion"
    SCHEMA_VIOLATION = "SchemaViolation"


class DocumentValidationError(Exception):
    """Raised by the validator adapter when a document cannot be accepted."""

    def __init__(self, kind: FailureKind, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class PipelineError(Exception):
    """Terminal failure of a pipeline run, already classified for the caller."""

    def __init__(self, outcome: Outcome, detail: str = ""):
        self.outcome = outcome
        self.detail = detail
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.outcome.status_code

    @property
    def category(self) -> Category:
        return self.outcome.category

    @property
    def message(self) -> str:
        return self.outcome.render(self.detail)


_KIND_TO_OUTCOME = {
    FailureKind.SYNTAX_ERROR: Outcome.MALFORMED_INPUT,
    FailureKind.UNSUPPORTED_VERSION: Outcome.UNSUPPORTED_VERSION,
    FailureKind.SCHEMA_VIOLATION: Outcome.INVALID_DOCUMENT,
}


def classify_validation_error(error: DocumentValidationError) -> PipelineError:
    return PipelineError(_KIND_TO_OUTCOME[error.kind], error.detail)


def classify_internal_fault(error: BaseException, redact: bool = False) -> PipelineError:
    detail = REDACTED_DETAIL if redact else str(error) or type(error).__name__
    return PipelineError(Outcome.INTERNAL_FAULT, detail)
