"""
Drone API client
Read-only client for the endpoints the dashboard needs
"""

import requests
from typing import Optional, Dict, List, Any

from .exceptions import DroneAPIError, DroneAuthenticationError


class ReposAPI:
    """Repository endpoints"""

    def __init__(self, client: 'DroneClient'):
        self.client = client

    def list(self, latest: bool = True) -> List[Dict[str, Any]]:
        """List repositories visible to the current user

        Args:
            latest: Ask the server to embed each repository's latest build.
                Older servers reject the parameter; in that case the plain
                listing is returned instead.

        Returns:
            List of repository dictionaries
        """
        if latest:
            try:
                response = self.client._request('GET', '/api/user/repos', params={'latest': 'true'})
            except DroneAuthenticationError:
                raise
            except DroneAPIError:
                response = self.client._request('GET', '/api/user/repos')
        else:
            response = self.client._request('GET', '/api/user/repos')
        return response if isinstance(response, list) else []


class BuildsAPI:
    """Build endpoints"""

    def __init__(self, client: 'DroneClient'):
        self.client = client

    def list(self, namespace: str, name: str, page: int = 1) -> List[Dict[str, Any]]:
        """List builds of a repository, newest first

        Args:
            namespace: Repository owner
            name: Repository name
            page: 1-based page number

        Returns:
            List of build dictionaries (without stages)
        """
        response = self.client._request(
            'GET',
            f'/api/repos/{namespace}/{name}/builds',
            params={'page': page},
        )
        return response if isinstance(response, list) else []

    def get(self, namespace: str, name: str, number: int) -> Dict[str, Any]:
        """Get a single build including its stages and steps

        Args:
            namespace: Repository owner
            name: Repository name
            number: Build number

        Returns:
            Build dictionary
        """
        return self.client._request('GET', f'/api/repos/{namespace}/{name}/builds/{number}')


class LogsAPI:
    """Log endpoints"""

    def __init__(self, client: 'DroneClient'):
        self.client = client

    def get(self, namespace: str, name: str, build: int, stage: int, step: int) -> List[Dict[str, Any]]:
        """Get the log lines of one step

        Args:
            namespace: Repository owner
            name: Repository name
            build: Build number
            stage: Stage number within the build
            step: Step number within the stage

        Returns:
            List of line dictionaries with 'pos', 'out' and 'time' keys
        """
        response = self.client._request(
            'GET',
            f'/api/repos/{namespace}/{name}/builds/{build}/logs/{stage}/{step}',
        )
        return response if isinstance(response, list) else []


class DroneClient:
    """
    Main Drone API client

    Usage:
        client = DroneClient(
            server_url='https://drone.example.com',
            token='your-token'
        )

        # List repositories
        repos = client.repos.list()
    """

    def __init__(
        self,
        server_url: str,
        token: Optional[str] = None,
        timeout: int = 30,
    ):
        self.server_url = server_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()

        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'

        # Initialize API endpoints
        self.repos = ReposAPI(self)
        self.builds = BuildsAPI(self)
        self.logs = LogsAPI(self)

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None
    ) -> Any:
        """Make HTTP request to API"""
        url = f'{self.server_url}{path}'

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.timeout
            )
        except requests.Timeout:
            raise TimeoutError(f'Request to {url} timed out after {self.timeout}s')

        if response.status_code >= 400:
            raise DroneAPIError.from_response(method, url, response)

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError:
            return response.text

    def build_url(self, slug: str, number: Optional[int] = None) -> str:
        """Web UI link for a repository or one of its builds"""
        if number is None:
            return f'{self.server_url}/{slug}'
        return f'{self.server_url}/{slug}/{number}'
