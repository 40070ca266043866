import logging
import re
from pathlib import Path
from typing import Any, List, Mapping

from prance import ResolvingParser, ValidationError
from prance.util.formats import ParseError, parse_spec
from pydantic import BaseModel, ConfigDict

from openapi_summary.errors import DocumentValidationError, FailureKind

logger = logging.getLogger("app")

DEFAULT_BACKEND = "openapi-spec-validator"

# Swagger 2.0, OpenAPI 3.0.N and 3.1.N, always as strings
SUPPORTED_VERSION_RE = re.compile(r"^(2\.0|3\.[01]\.\d+)$")


class ResourceDescriptor(BaseModel):
    path: str
    method: str

    model_config = ConfigDict(frozen=True)


def read_spec_source(path: str) -> dict:
    try:
        text = Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentValidationError(FailureKind.SYNTAX_ERROR, f"file is not valid UTF-8: {e}") from e

    try:
        document = parse_spec(text, path)
    except ParseError as e:
        raise DocumentValidationError(FailureKind.SYNTAX_ERROR, str(e)) from e
    except Exception as e:
        # raw decoder errors that prance lets through
        raise DocumentValidationError(FailureKind.SYNTAX_ERROR, f"{type(e).__name__}: {e}") from e

    if not isinstance(document, Mapping):
        raise DocumentValidationError(
            FailureKind.SYNTAX_ERROR,
            f"top-level value must be a mapping, got {type(document).__name__}"
        )
    return document


def check_spec_version(document: Mapping[str, Any]) -> None:
    declared = document.get("openapi", document.get("swagger"))
    if declared is None:
        # prance reports the missing version field itself
        return
    # an unquoted YAML version (swagger: 2.0) arrives as a float
    if not isinstance(declared, str) or not SUPPORTED_VERSION_RE.match(declared.strip()):
        raise DocumentValidationError(
            FailureKind.UNSUPPORTED_VERSION,
            f"Unsupported specification version {declared!r}. "
            f"Supported: '2.0', '3.0.x', '3.1.x' given as strings"
        )


def validator_message(error: Exception) -> str:
    """Short human message of a prance error, not the jsonschema internals in its args."""
    if error.args and isinstance(error.args[0], str):
        return error.args[0]
    cause_message = getattr(error.__cause__, "message", None)
    if isinstance(cause_message, str):
        return cause_message
    return str(error) or type(error).__name__


def load_openapi_spec(path: str, backend: str = DEFAULT_BACKEND) -> dict:
    """
    Parse, resolve and validate the OpenAPI/Swagger document at ``path``.

    Returns the fully resolved specification. Any failure is raised as a
    DocumentValidationError tagged with the kind of failure:

    - SYNTAX_ERROR: the file is not parseable JSON/YAML
    - UNSUPPORTED_VERSION: the declared spec version is not supported
    - SCHEMA_VIOLATION: everything else the validator rejects
    """
    document = read_spec_source(path)
    check_spec_version(document)

    try:
        # non-strict: integer keys such as unquoted status codes are stringified
        parser = ResolvingParser(path, backend=backend, strict=False)
    except ValidationError as e:
        message = validator_message(e)
        # prance only signals version problems through the message text
        if "Unsupported" in message:
            raise DocumentValidationError(FailureKind.UNSUPPORTED_VERSION, message) from e
        raise DocumentValidationError(FailureKind.SCHEMA_VIOLATION, message) from e
    except ParseError as e:
        raise DocumentValidationError(FailureKind.SYNTAX_ERROR, validator_message(e)) from e
    except Exception as e:
        message = validator_message(e)
        logger.info("validator_rejected", extra={"error_type": type(e).__name__, "error": message})
        raise DocumentValidationError(FailureKind.SCHEMA_VIOLATION, message) from e

    return parser.specification


def extract_resources(spec: Mapping[str, Any]) -> List[ResourceDescriptor]:
    resources = []

    for path, methods in (spec.get("paths") or {}).items():
        for method in (methods or {}):
            resources.append(ResourceDescriptor(path=path, method=method.upper()))

    return resources
