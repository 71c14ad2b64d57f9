import logging
import time
from typing import Any, Callable, List, Optional, Sequence

import requests

from orderdesk_bridge.config import Settings, get_settings
from orderdesk_bridge.errors import RemoteError, ValidationError
from orderdesk_bridge.schemas import ShipmentRecord, SubmissionItem, SubmissionResult

logger = logging.getLogger(__name__)


def simplify_results(items: Sequence[Any]) -> List[SubmissionItem]:
    """Reduces OrderDesk's per-order responses to status/message pairs."""
    simplified = []
    for item in items:
        if not isinstance(item, dict):
            item = {}
        if item.get("error"):
            simplified.append(SubmissionItem(status="error", message=str(item["error"])))
            continue

        post_response = item.get("postResponse", item)
        if not isinstance(post_response, dict):
            post_response = {}
        simplified.append(SubmissionItem(
            status=str(post_response.get("status") or "unknown"),
            message=str(post_response.get("message") or "No message provided"),
        ))
    return simplified


class SubmissionClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        settings = settings or get_settings()
        self.submit_url = settings.submit_url
        self.max_attempts = max(1, settings.submit_max_attempts)
        self.backoff_seconds = settings.submit_backoff_seconds
        self.timeout = settings.submit_timeout_seconds
        self.session = session or requests.Session()
        self._sleep = sleep

    def submit(self, records: Sequence[ShipmentRecord]) -> SubmissionResult:
        """
        POSTs every record to OrderDesk as one JSON array.
        Failed attempts are retried with a linear backoff (attempt * backoff_seconds);
        the last failure is raised once attempts run out.
        """
        if not records:
            raise ValidationError("No shipment records to submit")

        payload = [record.model_dump() for record in records]
        logger.info("Preparing to send %d records to %s", len(payload), self.submit_url)

        for attempt in range(1, self.max_attempts + 1):
            try:
                body = self._post(payload)
            except RemoteError as e:
                logger.warning("Attempt %d/%d to submit data failed: %s", attempt, self.max_attempts, e)
                if attempt == self.max_attempts:
                    logger.error("All %d retry attempts failed", self.max_attempts)
                    raise
                self._sleep(attempt * self.backoff_seconds)
                continue

            logger.info("Response received from submit route: %s", body)
            return self._to_result(body)

    def _post(self, payload: list) -> Any:
        try:
            response = self.session.post(
                self.submit_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteError(None, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise RemoteError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(response.status_code, response.text) from e

    @staticmethod
    def _to_result(body: Any) -> SubmissionResult:
        if not isinstance(body, dict):
            body = {}
        return SubmissionResult(
            status=str(body.get("status") or "success"),
            message=str(body.get("message") or "No message provided"),
            execution_time=str(body.get("execution_time") or "N/A"),
            results=simplify_results(body.get("results") or []),
        )
