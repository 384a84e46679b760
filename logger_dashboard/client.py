"""HTTP client for the external log ingestion endpoint."""

import logging

import requests
from requests.adapters import HTTPAdapter

from logger_dashboard.models import Candidate

logger = logging.getLogger(__name__)


class SubmissionFailed(Exception):
    """The ingestion endpoint did not accept a log entry.

    Raised for transport errors and for any non-2xx response. ``status`` is
    the HTTP status code when a response was received, otherwise None.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class IngestClient:
    """POSTs candidates as JSON to a single ingestion URL.

    A requests.Session is shared by all worker threads; the session's
    connection pool is sized to match.
    """

    def __init__(self, url: str, timeout: float = 5.0, pool_size: int = 8):
        self._url = url
        self._timeout = timeout
        self._session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=1, pool_maxsize=max(pool_size, 1),
        )
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    @property
    def url(self) -> str:
        return self._url

    def submit(self, candidate: Candidate):
        """Send one candidate. Returns on any 2xx; raises SubmissionFailed otherwise."""
        try:
            response = self._session.post(
                self._url,
                json=candidate.to_payload(),
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Could not reach %s: %s", self._url, e)
            raise SubmissionFailed(f"Transport error: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning("Ingestion rejected log entry: HTTP %d", response.status_code)
            raise SubmissionFailed(
                f"Ingestion endpoint returned HTTP {response.status_code}",
                status=response.status_code,
            )
        logger.debug("Delivered %s/%s entry", candidate.service, candidate.level)

    def close(self):
        self._session.close()
