"""
Typed views over the marketplace API responses
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping

from ..errors import ParseError


def _require(payload: Mapping[str, Any], key: str, context: str) -> Any:
    if not isinstance(payload, Mapping):
        raise ParseError(f"{context}: expected an object, got {type(payload).__name__}")
    if key not in payload or payload[key] is None:
        raise ParseError(f"{context}: missing '{key}'")
    return payload[key]


def _require_str(payload: Mapping[str, Any], key: str, context: str) -> str:
    value = _require(payload, key, context)
    if not isinstance(value, str):
        raise ParseError(f"{context}: '{key}' should be a string, got {type(value).__name__}")
    return value


def to_decimal(value: Any, context: str) -> Decimal:
    """
    Convert a decoded JSON number into a Decimal.

    Floats are expected to have been decoded with ``parse_float=Decimal``
    already; ints and numeric strings are accepted as well.
    """
    if isinstance(value, bool):
        raise ParseError(f"{context}: boolean is not a number")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise ParseError(f"{context}: {value!r} is not a number") from exc
        if not result.is_finite():
            raise ParseError(f"{context}: {value!r} is not a finite number")
        return result
    raise ParseError(f"{context}: expected a number, got {type(value).__name__}")


@dataclass(frozen=True)
class Site:
    """A regional marketplace instance, e.g. MLA for Argentina."""

    id: str
    name: str
    default_currency: str

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Site":
        return cls(
            id=_require_str(payload, "id", "site"),
            name=_require_str(payload, "name", "site"),
            default_currency=_require_str(payload, "default_currency_id", "site"),
        )


@dataclass(frozen=True)
class Listing:
    """A single search result. Only the fields the comparison needs are kept."""

    title: str
    permalink: str
    price: Decimal
    currency_code: str

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Listing":
        return cls(
            title=_require_str(payload, "title", "listing"),
            permalink=_require_str(payload, "permalink", "listing"),
            price=to_decimal(_require(payload, "price", "listing"), "listing price"),
            currency_code=_require_str(payload, "currency_id", "listing"),
        )


def parse_sites(payload: Any) -> List[Site]:
    """Decode the site discovery response."""

    if not isinstance(payload, list):
        raise ParseError(f"sites: expected a list, got {type(payload).__name__}")
    return [Site.from_api(entry) for entry in payload]


def parse_search_results(payload: Any) -> List[Dict[str, Any]]:
    """Return the raw ``results`` entries of a search response."""

    results = _require(payload, "results", "search response")
    if not isinstance(results, list):
        raise ParseError(f"search response: 'results' should be a list, got {type(results).__name__}")
    return results


def parse_ratio(payload: Any) -> Decimal:
    """Decode a currency conversion response into a strictly positive ratio."""

    ratio = to_decimal(_require(payload, "ratio", "currency conversion"), "currency ratio")
    if ratio <= 0:
        raise ParseError(f"currency conversion: ratio must be positive, got {ratio}")
    return ratio
