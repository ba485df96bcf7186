"""
pricescope: compare the most expensive marketplace listing across regional sites.

Discovers the MercadoLibre sites, searches every one of them concurrently,
converts the top price to USD and prints the comparison. Also ships a BNA
dollar quote scraper.
"""

__all__ = [
    "banks",
    "config",
    "errors",
    "main",
    "marketplace",
    "report",
    "services",
]
