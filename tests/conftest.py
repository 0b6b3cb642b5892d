"""Pytest configuration - loads .env and provides a REDCap client over a mocked session."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from dotenv import load_dotenv

from redcap_api.sdk import RedcapApi

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

API_URL = "https://redcap.example.edu/api/"
TOKEN = "0123456789ABCDEF0123456789ABCDEF"


def make_response(
    text: str = "",
    status: int = 200,
    headers: dict[str, str] | None = None,
    content: bytes | None = None,
) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.text = text
    response.content = content if content is not None else text.encode()
    response.headers = headers or {}
    return response


@pytest.fixture
def session():
    """A requests session whose post() answers with a plain "1"."""
    mock = MagicMock(spec=requests.Session)
    mock.post.return_value = make_response("1")
    return mock


@pytest.fixture
def api(session):
    return RedcapApi(url=API_URL, token=TOKEN, session=session)


@pytest.fixture
def sent(session):
    """Return the form payload of the last POST."""

    def _sent() -> dict[str, str]:
        return session.post.call_args.kwargs["data"]

    return _sent
