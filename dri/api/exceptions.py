"""
Drone API client exceptions
"""

from typing import Any, Optional

# Longest response body kept as an error detail
DETAIL_LIMIT = 200


class DroneError(Exception):
    """Base exception for all Drone client errors"""


class DroneAPIError(DroneError):
    """Raised when the server answers with an error status

    Attributes:
        status_code: HTTP status of the response
        url: Requested URL
        detail: Drone's error message, or the start of the body
    """

    default_status: Optional[int] = None

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code if status_code is not None else self.default_status
        self.url = url
        self.detail = detail

    @classmethod
    def from_response(cls, method: str, url: str, response: Any) -> 'DroneAPIError':
        """Build the error matching a failed response's status"""
        status = response.status_code
        detail = _detail(response)
        message = f'{method} {url} failed with status {status}'
        if detail:
            message = f'{message}: {detail}'
        error_cls = _STATUS_ERRORS.get(status, DroneAPIError)
        return error_cls(message, status_code=status, url=url, detail=detail)


class DroneAuthenticationError(DroneAPIError):
    """Raised when the token is missing or rejected (401)"""

    default_status = 401


class DroneForbiddenError(DroneAPIError):
    """Raised when the token lacks access to the resource (403)"""

    default_status = 403


class DroneNotFoundError(DroneAPIError):
    """Raised when resource is not found (404)"""

    default_status = 404


_STATUS_ERRORS = {
    401: DroneAuthenticationError,
    403: DroneForbiddenError,
    404: DroneNotFoundError,
}


def _detail(response: Any) -> Optional[str]:
    # Drone reports errors as {"message": "..."}
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get('message'):
        return str(payload['message'])
    text = (response.text or '').strip()
    return text[:DETAIL_LIMIT] or None
