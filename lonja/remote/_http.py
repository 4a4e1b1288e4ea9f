"""
HttpStore — RemoteStore over the REST backend.

    store = HttpStore.from_settings(get_settings())
    match await store.list_active_products():
        case Ok(products): ...
        case Error(e): ...

requests is blocking, so every call runs in a worker thread via
asyncio.to_thread. No retries here: one call, one request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Any

import requests
from pydantic import ValidationError

import combinators as C
from kungfu import Ok, Error, LazyCoroResult, Result

from lonja.config import Settings
from lonja.domain import (
    ItemKind,
    Product,
    Combo,
    SaleRequest,
    SaleRecord,
    DailyTotals,
)
from lonja.remote._types import RemoteError, RemoteErrorKind
from lonja.remote._wire import (
    ProductDto,
    ComboDto,
    StockCheckDto,
    SaleRequestDto,
    SaleRecordDto,
    DailyTotalsDto,
    parse_one,
    parse_list,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Error mapping
# ═══════════════════════════════════════════════════════════════════════════════


def _transport_error(exc: Exception) -> RemoteError:
    match exc:
        case requests.Timeout():
            return RemoteError(RemoteErrorKind.TIMEOUT, f"request timed out: {exc}")
        case _:
            return RemoteError(RemoteErrorKind.TRANSPORT, f"{type(exc).__name__}: {exc}")


def _status_error(response: requests.Response) -> RemoteError:
    message = response.text[:200]
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = str(body.get("message") or body.get("mensaje") or body.get("error") or message)

    kind = RemoteErrorKind.REJECTED if response.status_code < 500 else RemoteErrorKind.SERVER
    return RemoteError(kind, message or response.reason or "", status=response.status_code)


def _json_body(response: requests.Response) -> Result[object, RemoteError]:
    if response.status_code >= 400:
        return Error(_status_error(response))
    try:
        return Ok(response.json())
    except ValueError as e:
        return Error(RemoteError(
            RemoteErrorKind.MALFORMED,
            f"response is not JSON: {e}",
            status=response.status_code,
        ))


def _decoded[T](decode: Callable[[object], T]) -> Callable[[object], Result[T, RemoteError]]:
    """Wrap a decoder so shape errors become MALFORMED instead of exceptions."""
    def run(body: object) -> Result[T, RemoteError]:
        try:
            return Ok(decode(body))
        except (ValidationError, TypeError) as e:
            return Error(RemoteError(RemoteErrorKind.MALFORMED, str(e)))
    return run


# ═══════════════════════════════════════════════════════════════════════════════
# HttpStore
# ═══════════════════════════════════════════════════════════════════════════════


class HttpStore:
    """RemoteStore backed by requests.Session."""

    __slots__ = ("_base_url", "_timeout", "_session")

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.setdefault("Content-Type", "application/json")

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpStore:
        return cls(settings.api_base_url, timeout=settings.request_timeout)

    def close(self) -> None:
        self._session.close()

    # ───────────────────────────────────────────────────────────────────────
    # Transport
    # ───────────────────────────────────────────────────────────────────────

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> LazyCoroResult[object, RemoteError]:
        url = f"{self._base_url}{path}"

        def call() -> requests.Response:
            logger.debug("%s %s params=%s", method, url, params)
            return self._session.request(
                method,
                url,
                params=params,
                json=body,
                timeout=self._timeout,
            )

        return (
            C.catching_async(lambda: asyncio.to_thread(call), on_error=_transport_error)
            .then(lambda response: C.from_result(_json_body(response)))
        )

    def _get_list[D: (ProductDto, ComboDto, SaleRecordDto), T](
        self,
        path: str,
        dto: type[D],
        to_domain: Callable[[D], T],
        *,
        params: dict[str, Any] | None = None,
    ) -> LazyCoroResult[list[T], RemoteError]:
        decode = _decoded(lambda body: [to_domain(d) for d in parse_list(dto, body)])
        return self._send("GET", path, params=params).then(
            lambda body: C.from_result(decode(body))
        )

    # ───────────────────────────────────────────────────────────────────────
    # RemoteStore
    # ───────────────────────────────────────────────────────────────────────

    def list_active_products(self) -> LazyCoroResult[list[Product], RemoteError]:
        return self._get_list("/productos/activos", ProductDto, ProductDto.to_domain)

    def list_active_combos(self) -> LazyCoroResult[list[Combo], RemoteError]:
        return self._get_list("/combos/activos", ComboDto, ComboDto.to_domain)

    def has_stock(
        self,
        kind: ItemKind,
        item_id: int,
        quantity: Decimal,
    ) -> LazyCoroResult[bool, RemoteError]:
        match kind:
            case ItemKind.PRODUCT:
                path = f"/productos/{item_id}/validar-stock"
            case ItemKind.COMBO:
                path = f"/combos/{item_id}/validar-stock"
        decode = _decoded(lambda body: parse_one(StockCheckDto, body).has_stock)
        return self._send("GET", path, params={"cantidad": format(quantity, "f")}).then(
            lambda body: C.from_result(decode(body))
        )

    def create_sale(self, request: SaleRequest) -> LazyCoroResult[SaleRecord, RemoteError]:
        payload = SaleRequestDto.from_domain(request).to_json()
        decode = _decoded(lambda body: parse_one(SaleRecordDto, body).to_domain())
        return self._send("POST", "/ventas", body=payload).then(
            lambda body: C.from_result(decode(body))
        )

    def list_sales(self, start: date, end: date) -> LazyCoroResult[list[SaleRecord], RemoteError]:
        return self._get_list(
            "/ventas/range",
            SaleRecordDto,
            SaleRecordDto.to_domain,
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
        )

    def daily_totals(self, day: date) -> LazyCoroResult[DailyTotals, RemoteError]:
        decode = _decoded(lambda body: parse_one(DailyTotalsDto, body).to_domain(day))
        return self._send("GET", "/ventas/total/date", params={"date": day.isoformat()}).then(
            lambda body: C.from_result(decode(body))
        )


__all__ = ("HttpStore",)
