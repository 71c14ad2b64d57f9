import logging
from typing import Iterator, Union

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as FormFile

from orderdesk_bridge.config import Settings, get_settings
from orderdesk_bridge.errors import build_error_envelope
from orderdesk_bridge.schemas import ErrorEnvelope, SubmissionResult
from orderdesk_bridge.services.csv_normalizer import parse_csv_bytes
from orderdesk_bridge.services.submission import SubmissionClient
from orderdesk_bridge.services.transform import format_shipments

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


def get_submission_client() -> Iterator[SubmissionClient]:
    client = SubmissionClient()
    try:
        yield client
    finally:
        client.session.close()


@router.post(
    "/",
    response_model=SubmissionResult,
    responses={400: {"description": "No file attached"}, 500: {"model": ErrorEnvelope}},
)
@router.post("/cannon-hill", response_model=SubmissionResult, include_in_schema=False)
def upload_shipments(
    # str covers a plain text field named "file"; only a real file part is accepted
    file: Union[UploadFile, str, None] = File(None),
    client: SubmissionClient = Depends(get_submission_client),
    settings: Settings = Depends(get_settings),
):
    if not isinstance(file, FormFile) or not file.filename:
        logger.error("No file attached in the request")
        return JSONResponse(status_code=400, content={"message": "No file attached."})

    try:
        logger.info("File received (%s), starting CSV parsing", file.filename)
        rows = parse_csv_bytes(file.file.read(), skip_lines=settings.csv_skip_lines)

        records = format_shipments(rows)

        result = client.submit(records)
        logger.info("Data submitted successfully: status=%s", result.status)
        return result

    except Exception as e:
        logger.exception("Error occurred while processing the request")
        return JSONResponse(status_code=500, content=build_error_envelope(e))
