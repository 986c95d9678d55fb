# chatplatform/base/repository.py
"""
Base repository class cho tất cả API clients.
Provides retry logic, error handling, và standardized HTTP methods.
"""

from abc import ABC
import requests
from typing import Dict, Any
import time
import logging

logger = logging.getLogger(__name__)


class BaseRepository(ABC):
    """
    Base repository cho API calls với retry logic và error handling.

    Usage:
        class MyAPIRepository(BaseRepository):
            def list_something(self, payload: Dict[str, Any]) -> Dict[str, Any]:
                return self.post("action/list_something", json=payload)

        repo = MyAPIRepository(session, "https://api.example.com/v3.5/agent")
        data = repo.list_something({})
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        retry: int = 3,
        timeout: int = 30,
    ):
        """
        Initialize repository.

        Args:
            session: requests.Session với headers (auth, content-type) đã setup
            base_url: Base URL của API (không có trailing slash)
            retry: Số lần thử mặc định khi gặp network error
            timeout: Request timeout mặc định (seconds)
        """
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.retry = retry
        self.timeout = timeout

    def _build_url(self, path: str) -> str:
        """
        Build full URL từ path.

        Args:
            path: Path relative to base_url (có thể có hoặc không có leading slash)
        """
        path = path.lstrip('/')
        return f"{self.base_url}/{path}"

    def _request(
        self,
        method: str,
        path: str,
        retry: int = None,
        retry_delay: float = 1.0,
        timeout: int = None,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request với retry logic.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path
            retry: Số lần retry khi gặp network error (default: self.retry)
            retry_delay: Delay giữa các retry (seconds)
            timeout: Request timeout (default: self.timeout)
            **kwargs: Additional arguments cho requests (params, json, headers...)

        Returns:
            requests.Response object

        Raises:
            requests.RequestException: Khi request fail sau khi retry hết
        """
        url = self._build_url(path)
        # Luôn thử ít nhất 1 lần, kể cả khi config retry <= 0
        retry = max(1, self.retry if retry is None else retry)
        timeout = self.timeout if timeout is None else timeout
        last_exception = None

        for attempt in range(retry):
            try:
                request_start = time.time()
                logger.debug(f"[{method}] {url} (attempt {attempt + 1}/{retry})")

                response = self.session.request(
                    method=method,
                    url=url,
                    timeout=timeout,
                    **kwargs
                )

                request_time = time.time() - request_start
                logger.debug(f"Response: {response.status_code} (took {request_time:.2f}s)")
                return response

            except requests.Timeout as e:
                # Timeout: chỉ retry 1 lần
                last_exception = e
                logger.warning(
                    f"Request timeout (attempt {attempt + 1}/{retry}): {e}"
                )

                timeout_retry_limit = min(1, retry - 1)
                if attempt < timeout_retry_limit:
                    logger.info(f"Retrying timeout request in {retry_delay}s...")
                    time.sleep(retry_delay)
                else:
                    logger.error(f"Request timeout after {timeout_retry_limit + 1} attempt(s), giving up")
                    raise

            except requests.ConnectionError as e:
                last_exception = e
                logger.warning(
                    f"Request failed (attempt {attempt + 1}/{retry}): {e}"
                )

                if attempt < retry - 1:
                    # Exponential backoff
                    sleep_time = retry_delay * (2 ** attempt)
                    logger.info(f"Retrying in {sleep_time}s...")
                    time.sleep(sleep_time)
                else:
                    logger.error(f"Request failed after {retry} attempts")
                    raise

            except requests.RequestException as e:
                # Các lỗi khác không retry
                logger.error(f"Request error: {e}")
                raise

        if last_exception:
            raise last_exception

    def _raise_for_status(self, response: requests.Response) -> None:
        """
        Hook kiểm tra status code. Subclass override để map lỗi của từng API.
        """
        response.raise_for_status()

    def post(self, path: str, **kwargs) -> Dict[str, Any]:
        """
        POST request.

        Args:
            path: API path
            **kwargs: json, data, headers, timeout, retry, etc.

        Returns:
            Response JSON as dict
        """
        response = self._request('POST', path, **kwargs)
        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError:
            # Response không phải JSON
            logger.warning(f"Response is not JSON: {response.text[:200]}")
            return {}
