"""
Core HTTP client for the REDCap API.

Handles configuration, the single POST dispatch every operation goes
through, file downloads, and error handling.
"""

import json
import logging
import os
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from redcap_api.core.types import ExportedFile

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_TIMEOUT = 60

_FILE_NAME_RE = re.compile(r'name="?([^";]+)"?')


class RedcapError(Exception):
    """Base error class for REDCap client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class APIError(RedcapError):
    """API error with status code and the raw response body."""

    def __init__(
        self,
        message: str,
        status: int = 0,
        body: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status = status
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        return result


class ValidationError(RedcapError):
    """Validation error for local input/data issues (not API errors)."""


def _error_message(body: str, fallback: str) -> str:
    """Pull the message out of a REDCap error body (JSON or XML)."""
    text = body.strip()
    if not text:
        return fallback
    try:
        data = json.loads(text)
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
    except json.JSONDecodeError:
        pass
    if text.startswith("<"):
        try:
            node = ET.fromstring(text).find(".//error")
            if node is not None and node.text:
                return node.text.strip()
        except ET.ParseError:
            pass
    return text


class APIClient:
    """
    Low-level HTTP client for a REDCap instance.

    Handles:
    - API URL, default token and timeout configuration
    - Form-encoded and multipart POST dispatch
    - Error handling and file downloads
    """

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ):
        """
        Initialize the API client.

        Args:
            url: REDCap API URL, e.g. https://redcap.example.edu/api/ (or REDCAP_API_URL env var)
            token: Default project token used when an operation gets none (or REDCAP_API_TOKEN env var)
            timeout: Request timeout in seconds (or REDCAP_TIMEOUT env var)
            verify_ssl: Verify the server's TLS certificate
            session: Optional pre-configured requests session

        Raises:
            ValidationError: If the URL is missing or malformed, or REDCAP_TIMEOUT is not a number

        """
        self.url = self._validate_url(url or os.environ.get("REDCAP_API_URL"))
        self.token = token or os.environ.get("REDCAP_API_TOKEN")
        if timeout is None:
            raw_timeout = os.environ.get("REDCAP_TIMEOUT", DEFAULT_TIMEOUT)
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValidationError(f"Invalid REDCAP_TIMEOUT value: {raw_timeout!r}")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session or requests.Session()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    @staticmethod
    def _validate_url(url: str | None) -> str:
        if not url:
            raise ValidationError("REDCap API URL required. Set REDCAP_API_URL env var or pass url")
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(f"Invalid REDCap API URL: {url}")
        return url

    def ensure_token(self, token: str | None = None) -> str:
        """Return the call's token, falling back to the client default."""
        resolved = token or self.token
        if not resolved:
            logger.error("No REDCap token provided")
            raise ValidationError("REDCap token required. Set REDCAP_API_TOKEN env var or pass a token")
        return resolved

    # =========================================================================
    # Dispatch
    # =========================================================================

    def post(
        self,
        payload: dict[str, str],
        files: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        """
        POST a payload to the REDCap API.

        Args:
            payload: Form fields (already converted to wire strings)
            files: Multipart file parts, sent as multipart/form-data when given
            timeout: Request timeout override

        Returns:
            The successful response

        Raises:
            APIError: On HTTP errors, connection failures and timeouts

        """
        request_timeout = timeout or self.timeout
        content = payload.get("content", "")
        action = payload.get("action")
        label = f"{content}/{action}" if action else content

        try:
            response = self.session.post(
                self.url,
                data=payload,
                files=files,
                timeout=request_timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout:
            logger.error("REDCap request %s timed out after %s seconds", label, request_timeout)
            raise APIError(f"Request timed out after {request_timeout} seconds")
        except requests.exceptions.ConnectionError as e:
            logger.error("REDCap request %s failed to connect: %s", label, e)
            raise APIError(f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            logger.error("REDCap request %s failed: %s", label, e)
            raise APIError(f"Request failed: {e}")

        if response.status_code >= 400:
            body = response.text
            message = _error_message(body, f"HTTP {response.status_code}")
            logger.error("REDCap request %s returned HTTP %s: %s", label, response.status_code, message)
            raise APIError(message, status=response.status_code, body=body)

        logger.debug("REDCap request %s returned HTTP %s", label, response.status_code)
        return response

    def post_text(self, payload: dict[str, str], files: dict[str, Any] | None = None) -> str:
        """POST and return the response body as text, unchanged."""
        return self.post(payload, files=files).text

    def post_file(self, payload: dict[str, str], file_path: str | None = None) -> ExportedFile:
        """
        POST a file export request and return the file.

        REDCap names the file in the Content-Type header
        (``text/plain; name="scan.txt"``). When ``file_path`` is given the
        body is also written to that directory, which is created if missing.
        """
        response = self.post(payload)
        content_type = response.headers.get("Content-Type", "")
        file_name = _file_name(content_type, response.headers.get("Content-Disposition", ""))

        exported = ExportedFile(
            file_name=file_name,
            content_type=content_type.split(";")[0].strip(),
            content=response.content,
        )
        if file_path:
            exported.path = str(save_file(exported, file_path))
        return exported


def _file_name(content_type: str, disposition: str) -> str | None:
    for header in (content_type, disposition):
        match = _FILE_NAME_RE.search(header)
        if match:
            return match.group(1).strip()
    return None


def save_file(exported: ExportedFile, directory: str) -> Path:
    """Write an exported file into ``directory`` and return its path."""
    target_dir = Path(directory)
    if not target_dir.is_dir():
        logger.warning("Directory %s does not exist, creating it", target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)

    if not exported.file_name:
        raise ValidationError("REDCap response did not include a file name")

    name = Path(exported.file_name.replace('"', "").replace("\\", "/")).name
    if name in ("", ".", ".."):
        logger.error("Refusing to save file with unsafe name %r", exported.file_name)
        raise ValidationError(f"Unsafe file name in REDCap response: {exported.file_name!r}")

    target = target_dir / name
    target.write_bytes(exported.content)
    logger.debug("Saved %s (%d bytes)", target, len(exported.content))
    return target
