"""
Exchange-rate scrapers for bank websites
"""
from .base import BankScraper, ExchangeQuote

__all__ = [
    'BankScraper',
    'ExchangeQuote',
    'UnknownBankError',
    'AVAILABLE_BANKS',
    'get_bank_scraper',
]


class UnknownBankError(ValueError):
    """Raised when the caller references an unsupported bank."""


def _load_bna():
    from .bna import BnaScraper
    return BnaScraper


# Registry of all available banks
AVAILABLE_BANKS = {
    'bna': _load_bna,
}


def get_bank_scraper(bank_id: str, **kwargs) -> BankScraper:
    """
    Get a bank scraper instance by bank ID

    Args:
        bank_id: Bank identifier (bna)
        **kwargs: Passed to the scraper constructor (session, timeout)

    Returns:
        BankScraper: Instance of the appropriate bank scraper

    Raises:
        UnknownBankError: If bank_id is not recognized
    """
    loader = AVAILABLE_BANKS.get(bank_id.strip().lower())
    if loader is None:
        raise UnknownBankError(f"Unknown bank: {bank_id}. Available banks: {list(AVAILABLE_BANKS.keys())}")

    return loader()(**kwargs)
