"""Shared fixtures for the SlotWatch tests."""
from typing import Callable, Dict, Union

import httpx
import pytest

AVAILABLE_HTML = """
<html><body>
  <div class="calendar">
    <div class="day">1</div>
    <div class="day day-has-shows">
      <ul class="times">
        <li><a href="/book/2015-09-02-1100">11:00</a></li>
      </ul>
    </div>
  </div>
</body></html>
"""

UNAVAILABLE_HTML = """
<html><body>
  <div class="calendar">
    <div class="day">1</div>
    <div class="day day-has-shows">
      <ul class="times"><li>Sold out</li></ul>
    </div>
    <div class="day"><a href="/info">More info</a></div>
  </div>
</body></html>
"""

PageBehaviour = Union[str, int, type]


def build_transport(pages: Dict[str, PageBehaviour]) -> httpx.MockTransport:
    """Build a transport serving canned calendar pages.

    A string is served as a 200 HTML body, an int as an empty response with
    that status code, and an httpx exception class is raised for the request.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        behaviour = pages[str(request.url)]
        if isinstance(behaviour, type):
            raise behaviour("simulated failure", request=request)
        if isinstance(behaviour, int):
            return httpx.Response(behaviour, request=request)
        return httpx.Response(200, text=behaviour, request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def transport_factory() -> Callable[[Dict[str, PageBehaviour]], httpx.MockTransport]:
    return build_transport
