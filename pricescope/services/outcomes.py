"""Values exchanged between site workers, the collector and the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator, List, Union

from ..marketplace.models import Site


@dataclass(frozen=True)
class SiteSuccess:
    """Highest-priced listing of one site, priced in both currencies."""

    site: Site
    native_price: Decimal
    reference_price: Decimal
    ratio: Decimal
    item_title: str
    permalink: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SiteFailure:
    """A site whose search or currency lookup failed."""

    site: Site
    error: Exception
    stage: str = "search"

    @property
    def ok(self) -> bool:
        return False

    @property
    def detail(self) -> str:
        return str(self.error) or type(self.error).__name__


SiteOutcome = Union[SiteSuccess, SiteFailure]


@dataclass
class ResultSet:
    """
    Outcomes drained by the collector, in arrival order.

    Only the collector thread appends to it; callers get it once the
    collector has stopped.
    """

    successes: List[SiteSuccess] = field(default_factory=list)
    failures: List[SiteFailure] = field(default_factory=list)

    @property
    def received(self) -> int:
        """Total number of outcomes drained, successful or not."""
        return len(self.successes) + len(self.failures)

    def add(self, outcome: SiteOutcome) -> None:
        if outcome.ok:
            self.successes.append(outcome)
        else:
            self.failures.append(outcome)

    def __iter__(self) -> Iterator[SiteSuccess]:
        return iter(self.successes)

    def __len__(self) -> int:
        return len(self.successes)
