import pytest

from openapi_summary.errors import (
    Category,
    DocumentValidationError,
    FailureKind,
    Outcome,
    PipelineError,
    REDACTED_DETAIL,
    classify_internal_fault,
    classify_validation_error,
)


@pytest.mark.parametrize("kind,outcome,status,prefix", [
    (FailureKind.SYNTAX_ERROR, Outcome.MALFORMED_INPUT, 400, "Bad Request: Invalid JSON/YAML syntax: "),
    (FailureKind.UNSUPPORTED_VERSION, Outcome.UNSUPPORTED_VERSION, 415,
     "Unsupported Media Type: Unsupported Swagger/OpenAPI version: "),
    (FailureKind.SCHEMA_VIOLATION, Outcome.INVALID_DOCUMENT, 422,
     "Unprocessable Entity: Invalid Swagger/OpenAPI document: "),
])
def test_classify_validation_error(kind, outcome, status, prefix):
    error = classify_validation_error(DocumentValidationError(kind, "boom"))
    assert error.outcome is outcome
    assert error.status_code == status
    assert error.message == prefix + "boom"


def test_every_kind_has_an_outcome():
    outcomes = {classify_validation_error(DocumentValidationError(kind, "")).outcome for kind in FailureKind}
    assert len(outcomes) == len(FailureKind)


def test_rejected_input_outcomes():
    assert Outcome.NO_FILE_PROVIDED.category is Category.REJECTED_INPUT
    assert Outcome.INVALID_FILE_TYPE.category is Category.REJECTED_INPUT
    assert Outcome.NO_FILE_PROVIDED.status_code == 415
    assert Outcome.INVALID_FILE_TYPE.status_code == 400
    assert "No file uploaded" in PipelineError(Outcome.NO_FILE_PROVIDED).message
    assert "Invalid file type" in PipelineError(Outcome.INVALID_FILE_TYPE).message


def test_internal_fault_keeps_detail():
    error = classify_internal_fault(ValueError("disk full"))
    assert error.category is Category.INTERNAL_FAULT
    assert error.status_code == 500
    assert error.message == "Internal Server Error: disk full"


def test_internal_fault_without_message_uses_type_name():
    assert classify_internal_fault(KeyError()).detail == "KeyError"


def test_internal_fault_redacted():
    error = classify_internal_fault(ValueError("/srv/secret"), redact=True)
    assert "secret" not in error.message
    assert error.detail == REDACTED_DETAIL


def test_pipeline_error_str_is_message():
    error = PipelineError(Outcome.INVALID_DOCUMENT, "'info' is a required property")
    assert str(error) == error.message
