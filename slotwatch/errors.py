"""Exception hierarchy for SlotWatch."""
from typing import Iterable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PageCheckOutcome


class SlotWatchError(Exception):
    """Base class for all SlotWatch errors."""


class ConfigurationError(SlotWatchError):
    """Raised when required settings are missing or invalid."""


class ExtractionError(SlotWatchError):
    """Raised when a calendar page cannot be parsed."""


class PollError(SlotWatchError):
    """A polling cycle could not check every page.

    ``failures`` holds the outcomes of the pages that failed, in the order
    the pages are configured.
    """

    def __init__(self, message: str, failures: Iterable["PageCheckOutcome"] = ()):
        super().__init__(message)
        self.failures: List["PageCheckOutcome"] = list(failures)

    @property
    def failed_urls(self) -> List[str]:
        return [outcome.url for outcome in self.failures]


class AllPagesFailedError(PollError):
    """No page could be checked, so no status can be reported."""


class PartialPollError(PollError):
    """Some pages failed; the reported status only covers the rest."""
