"""Product resolver backed by Open Food Facts."""

import logging
from dataclasses import dataclass

import httpx

from nutriscan.adapters.off_client import OpenFoodFactsClient
from nutriscan.domain.products import (
    PRODUCT_FIELDS,
    Found,
    LookupOutcome,
    NotFound,
    ProductRecord,
    TransportError,
)

_FOUND_STATUS = 1

_logger = logging.getLogger(__name__)


@dataclass
class ProductResolver:
    """Resolve barcodes into normalized product records."""

    client: OpenFoodFactsClient

    async def resolve(self, barcode: str) -> LookupOutcome:
        """Look a barcode up and classify the result."""
        try:
            payload = await self.client.get_product(barcode, fields=PRODUCT_FIELDS)
        except httpx.HTTPStatusError as exc:
            if _is_not_found_response(exc.response):
                _logger.info("Product not found: barcode=%s", barcode)
                return NotFound(barcode=barcode)
            return _transport_error(barcode, exc)
        except httpx.HTTPError as exc:
            return _transport_error(barcode, exc)
        except ValueError as exc:
            _logger.warning("Product lookup returned invalid JSON: %s", exc)
            return TransportError(reason="Open Food Facts returned invalid JSON")

        if (
            not isinstance(payload, dict)
            or payload.get("status") != _FOUND_STATUS
            or "product" not in payload
        ):
            _logger.info("Product not found: barcode=%s", barcode)
            return NotFound(barcode=barcode)
        return Found(record=build_record(barcode, payload["product"]))


def _transport_error(barcode: str, exc: httpx.HTTPError) -> TransportError:
    status_code = _status_code_from_exception(exc)
    _logger.warning(
        "Product lookup failed: barcode=%s status=%s error=%s",
        barcode,
        status_code,
        exc,
    )
    if status_code == "n/a":
        return TransportError(reason=f"Open Food Facts unreachable: {exc}")
    return TransportError(reason=f"Open Food Facts error: {status_code}")


def _is_not_found_response(response: httpx.Response) -> bool:
    """Open Food Facts answers unknown barcodes with 404 and status 0."""
    if response.status_code != httpx.codes.NOT_FOUND:
        return False
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("status") == 0


def build_record(barcode: str, product: object) -> ProductRecord:
    """Copy known product fields, leaving missing ones empty."""
    if not isinstance(product, dict):
        _logger.warning("Malformed product payload for barcode=%s", barcode)
        return ProductRecord(barcode=barcode)
    return ProductRecord(
        barcode=barcode,
        name=_text(product.get("product_name")),
        brand=_text(product.get("brands")),
        image_url=_text(product.get("image_url")),
        nutri_score_grade=_grade(product.get("nutriscore_grade")),
        quantity=_text(product.get("quantity")),
        categories=_text(product.get("categories")),
        nutrients_per_100g=_nutrients(product.get("nutriments")),
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def _grade(value: object) -> str | None:
    text = _text(value)
    if text is None or len(text) != 1 or not text.isalpha():
        return None
    return text.upper()


def _nutrients(value: object) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): float(amount)
        for key, amount in value.items()
        if isinstance(amount, int | float) and not isinstance(amount, bool)
    }
