"""
Admin page client
Handles HTTP requests against wp-admin: page reads, multipart form writes and
internal path resolution. The session is expected to be authenticated already.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from typing import Callable, Dict, List, Optional, Tuple, Union
import logging
from urllib.parse import urlparse
from bs4 import BeautifulSoup

from .parser import as_dom
from .results import Outcome, StepResult

logger = logging.getLogger(__name__)

FormFields = Union[Dict[str, str], List[Tuple[str, str]]]


class AdminClient:
    """Fetches and submits wp-admin pages through a shared requests session."""

    def __init__(
        self,
        site_url: str,
        timeout: int = 30,
        max_retries: int = 3,
        user_agent: str = "ThemeInstaller/1.0",
        cookies: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize admin client.

        Args:
            site_url: Externally reachable site URL, may include a sub-path
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts for reads
            user_agent: User agent string for requests
            cookies: Session cookies of an already logged-in user
            session: Existing session to reuse instead of creating one
        """
        self.site_url = site_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.user_agent = user_agent

        if session is None:
            # Only idempotent reads are retried, uploads go out exactly once
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=1,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET", "HEAD"]
            )
            session = requests.Session()
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session
        self.session.headers.update({
            'User-Agent': user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })
        if cookies:
            self.session.cookies.update(cookies)

    def resolve_internal_url(self, path: str) -> str:
        """
        Map an internal admin path to the URL reachable from this client.

        The site may be served under a scoped sub-path, so the path is
        appended to the site URL rather than joined against its origin.

        Args:
            path: Internal path such as '/wp-admin/'

        Returns:
            Absolute URL
        """
        return self.site_url.rstrip('/') + '/' + path.lstrip('/')

    def _absolute(self, path_or_url: str) -> str:
        if urlparse(path_or_url).scheme in ('http', 'https'):
            return path_or_url
        return self.resolve_internal_url(path_or_url)

    def request(
        self,
        path_or_url: str,
        method: str = 'GET',
        fields: Optional[FormFields] = None,
        files: Optional[Dict] = None
    ) -> requests.Response:
        """
        Perform one request. Non-2xx responses raise requests.HTTPError.

        Args:
            path_or_url: Admin path or absolute URL
            method: HTTP method
            fields: Form fields, sent as the request body
            files: Multipart file parts as accepted by requests

        Returns:
            Response with its text decoded
        """
        url = self._absolute(path_or_url)
        logger.debug(f"{method.upper()} {url}")

        response = self.session.request(
            method.upper(),
            url,
            data=fields,
            files=files,
            timeout=self.timeout,
            allow_redirects=True
        )
        response.raise_for_status()

        response.encoding = response.apparent_encoding or 'utf-8'
        logger.debug(f"Successfully fetched {url} -> {response.url} (HTTP {response.status_code})")
        return response

    def fetch_page(self, path_or_url: str) -> BeautifulSoup:
        """Read a page and return it as a queryable document."""
        return as_dom(self.request(path_or_url).text)

    def submit(
        self,
        path_or_url: str,
        method: str,
        fields: FormFields,
        files: Dict
    ) -> BeautifulSoup:
        """Send a multipart form and return the response page as a document."""
        return as_dom(self.request(path_or_url, method=method, fields=fields, files=files).text)

    def close(self):
        """Close the session."""
        self.session.close()


def transport_step(call: Callable, *args, **kwargs) -> StepResult:
    """
    Run a transport call, turning network and HTTP faults into a failed step.

    Returns:
        StepResult.ok(call result) or StepResult.failed(TRANSPORT_ERROR)
    """
    try:
        return StepResult.ok(call(*args, **kwargs))
    except requests.exceptions.Timeout as e:
        return StepResult.failed(Outcome.TRANSPORT_ERROR, f"Request timeout: {str(e)}")
    except requests.exceptions.ConnectionError as e:
        return StepResult.failed(Outcome.TRANSPORT_ERROR, f"Connection error: {str(e)}")
    except requests.exceptions.RequestException as e:
        return StepResult.failed(Outcome.TRANSPORT_ERROR, f"Request error: {str(e)}")
