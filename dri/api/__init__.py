"""
Drone CI API client

Thin read-only wrapper around the Drone REST API used by the dashboard.

Example:
    >>> from dri.api import DroneClient
    >>>
    >>> client = DroneClient(
    ...     server_url='https://drone.example.com',
    ...     token='your-token'
    ... )
    >>>
    >>> repos = client.repos.list(latest=True)
    >>> builds = client.builds.list('octocat', 'hello-world', page=1)
    >>> lines = client.logs.get('octocat', 'hello-world', 42, 1, 2)
"""

from .client import DroneClient
from .exceptions import (
    DroneError,
    DroneAPIError,
    DroneNotFoundError,
    DroneAuthenticationError,
    DroneForbiddenError,
)

__all__ = [
    "DroneClient",
    "DroneError",
    "DroneAPIError",
    "DroneNotFoundError",
    "DroneAuthenticationError",
    "DroneForbiddenError",
]
