import json
import traceback
from typing import Any, Optional

GENERIC_ERROR_MESSAGE = "An error occurred while processing the request"


class BridgeError(Exception):
    """Base class for failures raised while bridging an upload to OrderDesk."""


class ParseError(BridgeError):
    """The uploaded bytes could not be read as delimited text."""


class ValidationError(BridgeError):
    """The upload produced no shipment records to submit."""


class RemoteError(BridgeError):
    """
    The OrderDesk call failed after every retry.
    `status` is None when the request never got an HTTP response.
    """

    def __init__(self, status: Optional[int], response: Any):
        self.status = status
        self.response = response
        super().__init__(json.dumps({"status": status, "response": response}, default=str))


def _structured_response(error: BaseException) -> Any:
    if isinstance(error, RemoteError):
        return error.response or {"status": error.status, "response": error.response}

    # errors raised with a JSON body as their message
    try:
        parsed = json.loads(str(error))
    except ValueError:
        return None
    if isinstance(parsed, dict):
        return parsed.get("response") or parsed
    return None


def build_error_envelope(error: BaseException, status_code: int = 500) -> dict:
    response = _structured_response(error)
    if response is None and error.__traceback__ is not None:
        response = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    if response is None:
        response = str(error)

    return {
        "message": GENERIC_ERROR_MESSAGE,
        "error": {"status": status_code, "response": response},
    }
