# rocksteady_ci/webhook.py
"""
Webhook payload and HTTP client capability
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Mapping

from .errors import ExternalOperationFailure

logger = logging.getLogger(__name__)


def build_payload(build_number: str, branch: str, project_name: str) -> str:
    """
    Serialise the "build finished" notification.

    build_num is sent as a JSON number when the build number is numeric,
    as the server expects; any other value is sent as a string.
    """
    build_num = int(build_number) if build_number.isdigit() else build_number
    return json.dumps({
        "payload": {
            "outcome": "success",
            "lifecycle": "finished",
            "build_num": build_num,
            "branch": branch,
            "repository_name": project_name,
        }
    })


class HttpClient(ABC):
    """What the deploy command needs from an HTTP client"""

    @abstractmethod
    def post(self, url: str, body: str, headers: Mapping[str, str]) -> int:
        """POST once and return the status code; raise on failure"""
        pass


class HttpxClient(HttpClient):
    """Single-attempt POST using httpx"""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> int:
        import httpx

        try:
            response = httpx.post(url, content=body, headers=dict(headers), timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"❌ Webhook returned HTTP {status}")
            raise ExternalOperationFailure(f"POST {url}", f"HTTP {status}") from e
        except httpx.HTTPError as e:
            logger.error(f"❌ Webhook request failed: {e}")
            raise ExternalOperationFailure(f"POST {url}", str(e) or type(e).__name__) from e

        return response.status_code
