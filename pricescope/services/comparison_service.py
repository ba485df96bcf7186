"""Application service that compares the top listing price across marketplace sites."""

from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Optional, Tuple

from ..config import Config
from ..errors import PriceScopeError
from ..marketplace import MarketplaceClient
from ..marketplace.models import Listing, Site
from .collector import ResultCollector
from .outcomes import ResultSet, SiteFailure, SiteOutcome, SiteSuccess

logger = logging.getLogger(__name__)


def normalize_price(listing: Listing, ratio: Decimal, reference_currency: str) -> Tuple[Decimal, Decimal]:
    """
    Return ``(native_price, reference_price)`` for ``listing``.

    ``ratio`` always converts the site's currency into the reference
    currency, so a listing already priced in the reference currency is
    divided by it to recover the native price.
    """
    if listing.currency_code == reference_currency:
        reference_price = listing.price
        native_price = reference_price / ratio
    else:
        native_price = listing.price
        reference_price = native_price * ratio
    return native_price, reference_price


class SiteWorker:
    """Runs the search and the currency lookup for one site and builds its outcome."""

    def __init__(self, client: MarketplaceClient, reference_currency: Optional[str] = None) -> None:
        self._client = client
        self.reference_currency = reference_currency or client.reference_currency

    def run(self, search_term: str, site: Site) -> SiteOutcome:
        """Return the outcome for ``site``. Never raises."""

        try:
            return self._run(search_term, site)
        except Exception as exc:
            logger.exception("Unexpected error while querying site %s", site.id)
            return SiteFailure(site=site, error=exc, stage="processing")

    def publish(self, search_term: str, site: Site, sink: "queue.Queue[object]") -> None:
        """Run the worker and send exactly one outcome to ``sink``."""

        sink.put(self.run(search_term, site))

    def _run(self, search_term: str, site: Site) -> SiteOutcome:
        # The rate lookup is scoped to this call: leaving the block joins it.
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"rate-{site.id}") as rate_scope:
            rate_future = rate_scope.submit(
                self._client.fetch_currency_ratio,
                site.default_currency,
                self.reference_currency,
            )

            try:
                listing = self._client.query_top_listing(search_term, site)
            except PriceScopeError as exc:
                rate_future.cancel()
                return SiteFailure(site=site, error=exc, stage="search")

            try:
                ratio = rate_future.result()
            except PriceScopeError as exc:
                return SiteFailure(site=site, error=exc, stage="currency lookup")

        native_price, reference_price = normalize_price(listing, ratio, self.reference_currency)
        logger.info(
            "%s: %s %s (%s %s)",
            site.name,
            site.default_currency,
            native_price,
            self.reference_currency,
            reference_price,
        )
        return SiteSuccess(
            site=site,
            native_price=native_price,
            reference_price=reference_price,
            ratio=ratio,
            item_title=listing.title,
            permalink=listing.permalink,
        )


class ComparisonService:
    """Facade that fans a search out to every site and gathers the outcomes."""

    def __init__(
        self,
        client: Optional[MarketplaceClient] = None,
        worker: Optional[SiteWorker] = None,
        queue_size: Optional[int] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._client = client or MarketplaceClient()
        self._worker = worker or SiteWorker(self._client)
        self._queue_size = Config.OUTCOME_QUEUE_SIZE if queue_size is None else queue_size
        self._max_workers = max_workers if max_workers is not None else Config.MAX_SITE_WORKERS

    def run(self, search_term: str) -> ResultSet:
        """
        Search every site for ``search_term``.

        Site discovery errors propagate to the caller; per-site errors end
        up in :attr:`ResultSet.failures`.
        """
        sites = self._client.discover_sites()
        logger.info("Searching %d sites for %r", len(sites), search_term)

        collector = ResultCollector(maxsize=self._queue_size)
        collector.start()
        try:
            pool_size = max(1, self._max_workers or len(sites))
            # Leaving the pool block waits for every worker, so all outcome
            # puts have returned before the collector is told to stop.
            with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="site-worker") as pool:
                futures = [
                    pool.submit(self._worker.publish, search_term, site, collector.outcomes)
                    for site in sites
                ]
            for site, future in zip(sites, futures):
                error = future.exception()
                if error is not None:
                    logger.error("Worker for site %s did not publish an outcome", site.id, exc_info=error)
        finally:
            results = collector.stop()

        logger.info(
            "Finished %r: %d sites priced, %d failed",
            search_term,
            len(results.successes),
            len(results.failures),
        )
        return results
