"""
Availability extraction from calendar page markup.
"""
import logging

from bs4 import BeautifulSoup

from .errors import ExtractionError
from .models import DEFAULT_SELECTOR

logger = logging.getLogger(__name__)


class AvailabilityRule:
    """A single CSS selector that marks a bookable slot.

    A page counts as available when at least one element matches.
    """

    def __init__(self, selector: str = DEFAULT_SELECTOR, parser: str = "html.parser"):
        if not selector or not selector.strip():
            raise ValueError("Availability selector must not be empty")
        self.selector = selector.strip()
        self.parser = parser

    def __repr__(self) -> str:
        return f"AvailabilityRule({self.selector!r})"

    def validate(self) -> None:
        """Compile the selector against an empty document.

        Raises:
            ExtractionError: if the selector is not valid CSS.
        """
        self.count_matches("")

    def count_matches(self, html: str) -> int:
        """Return how many elements in *html* match the selector."""
        try:
            soup = BeautifulSoup(html, self.parser)
            return len(soup.select(self.selector))
        except Exception as e:
            raise ExtractionError(f"Could not extract availability: {e}") from e

    def matches(self, html: str) -> bool:
        """Return True if *html* contains at least one available slot."""
        count = self.count_matches(html)
        logger.debug(f"Selector {self.selector!r} matched {count} element(s)")
        return count > 0
