"""
Polling cycle: fetch every calendar page, extract availability and aggregate.
"""
import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from .errors import AllPagesFailedError, PartialPollError, PollError
from .extractor import AvailabilityRule
from .fetcher import CalendarFetcher
from .models import AvailabilityStatus, FetcherConfig, PageCheckOutcome, PollResult

logger = logging.getLogger(__name__)

CycleResult = Tuple[Optional[PollError], Optional[PollResult]]


def aggregate(outcomes: Sequence[PageCheckOutcome]) -> CycleResult:
    """Combine per-page outcomes into one cycle result.

    The status is available if any page is available. If every page failed
    there is no status to report and an ``AllPagesFailedError`` is returned
    instead. If only some pages failed, the status covers the pages that were
    checked and a ``PartialPollError`` is returned next to it.
    """
    failures = [outcome for outcome in outcomes if outcome.failed]

    if len(failures) == len(outcomes):
        if outcomes:
            message = f"All {len(outcomes)} page check(s) failed: {failures[-1].error}"
        else:
            message = "No pages were checked"
        return AllPagesFailedError(message, failures), None

    available = any(outcome.available for outcome in outcomes if not outcome.failed)
    result = PollResult(
        status=AvailabilityStatus.AVAILABLE if available else AvailabilityStatus.UNAVAILABLE
    )

    if failures:
        error = PartialPollError(
            f"{len(failures)} of {len(outcomes)} page check(s) failed: {failures[-1].error}",
            failures,
        )
        return error, result

    return None, result


class Poller:
    """Runs polling cycles against the configured calendar pages."""

    def __init__(
        self,
        page_urls: Sequence[str],
        rule: Optional[AvailabilityRule] = None,
        fetcher_config: Optional[FetcherConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.page_urls = list(page_urls)
        self.rule = rule or AvailabilityRule()
        self.fetcher_config = fetcher_config or FetcherConfig()
        self.transport = transport

    async def check_page(self, fetcher: CalendarFetcher, url: str) -> PageCheckOutcome:
        """Fetch one page and test it for available slots.

        Fetch and parse failures are captured in the outcome, never raised.
        """
        try:
            html = await fetcher.fetch(url)
            available = self.rule.matches(html)
        except Exception as e:
            logger.warning(f"Could not check page {url}: {e!r}")
            return PageCheckOutcome(url=url, available=False, error=e)

        logger.debug(f"Page {url}: {'slots found' if available else 'no slots'}")
        return PageCheckOutcome(url=url, available=available)

    async def check_pages(self) -> List[PageCheckOutcome]:
        """Check all pages concurrently and wait for every one of them."""
        async with CalendarFetcher(self.fetcher_config, transport=self.transport) as fetcher:
            return list(await asyncio.gather(
                *(self.check_page(fetcher, url) for url in self.page_urls)
            ))

    async def poll(self) -> CycleResult:
        """Run one polling cycle and return ``(error, result)``."""
        outcomes = await self.check_pages()
        logger.debug(
            "Done processing pages: "
            + ", ".join(
                f"{o.url}={'error' if o.failed else o.available}" for o in outcomes
            )
        )
        return aggregate(outcomes)
