import logging
from typing import Callable, List, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from openapi_summary.config import Settings
from openapi_summary.errors import (
    DocumentValidationError,
    PipelineError,
    classify_internal_fault,
    classify_validation_error,
)
from openapi_summary.ingest import admit_upload
from openapi_summary.openapi_parser import ResourceDescriptor, extract_resources, load_openapi_spec
from openapi_summary.scratch import ScratchStore

logger = logging.getLogger("app")

Validator = Callable[[str], dict]


def default_validator(settings: Settings) -> Validator:
    def validate(path: str) -> dict:
        return load_openapi_spec(path, backend=settings.VALIDATOR_BACKEND)
    return validate


async def parse_swagger_upload(
    upload: Optional[UploadFile],
    settings: Settings,
    validator: Optional[Validator] = None,
) -> List[ResourceDescriptor]:
    """
    Run one upload through gate -> scratch copy -> validate -> extract.

    The scratch copy is released on every exit path. Failures come out as a
    PipelineError carrying exactly one outcome.
    """
    uploaded = admit_upload(upload, settings)
    validate = validator or default_validator(settings)

    try:
        store = ScratchStore(settings.SCRATCH_DIR)
        content = await uploaded.read_bytes()

        async with store.scratch_copy(content, uploaded.declared_extension) as scratch_path:
            uploaded.scratch_location = scratch_path
            try:
                document = await run_in_threadpool(validate, str(scratch_path))
            except DocumentValidationError as e:
                logger.info(
                    "document_rejected",
                    extra={"upload_name": uploaded.original_name, "kind": e.kind.value, "detail": e.detail}
                )
                raise classify_validation_error(e) from e

            resources = extract_resources(document)
    except PipelineError:
        raise
    except Exception as e:
        logger.exception("pipeline_internal_fault", extra={"upload_name": uploaded.original_name})
        raise classify_internal_fault(e, redact=settings.REDACT_INTERNAL_ERRORS) from e

    logger.info(
        "document_parsed",
        extra={"upload_name": uploaded.original_name, "resources": len(resources)}
    )
    return resources
