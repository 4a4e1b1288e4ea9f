"""
Wire — JSON shapes of the inventory/sales backend.

The backend speaks Spanish field names and is not consistent across
endpoints (``itemId`` vs ``productoId``/``comboId``, ``items`` vs
``detalles``), so every DTO accepts the known variants via AliasChoices
and converts to a domain record with ``to_domain()``.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer, ValidationError

from lonja.domain import (
    ItemKind,
    Product,
    ComboComponent,
    Combo,
    SaleType,
    SaleRequest,
    SaleDetail,
    SaleRecord,
    DailyTotals,
)

logger = logging.getLogger(__name__)


def _json_number(value: Decimal) -> int | float:
    return int(value) if value == value.to_integral_value() else float(value)


# JSON mode would render a plain Decimal as a string
JsonDecimal = Annotated[Decimal, PlainSerializer(_json_number, when_used="json")]


class _Dto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class ProductDto(_Dto):
    id: int = Field(validation_alias=AliasChoices("productoId", "id"))
    name: str = Field(validation_alias=AliasChoices("nombre", "name"))
    price_per_lb: Decimal = Field(validation_alias=AliasChoices("precioPorLibra", "price_per_lb"))
    stock_lb: Decimal = Field(validation_alias=AliasChoices("cantidadLibras", "stock_lb"))
    active: bool = Field(default=True, validation_alias=AliasChoices("estaActivo", "active"))
    packaging: str = Field(default="", validation_alias=AliasChoices("tipoEmpaque", "packaging"))

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            price_per_lb=self.price_per_lb,
            stock_lb=self.stock_lb,
            active=self.active,
            packaging=self.packaging,
        )


class ComboComponentDto(_Dto):
    product_id: int = Field(validation_alias=AliasChoices("productoId", "product_id"))
    quantity_lb: Decimal = Field(validation_alias=AliasChoices("cantidad", "cantidadLibras", "quantity_lb"))


class ComboDto(_Dto):
    id: int = Field(validation_alias=AliasChoices("comboId", "id"))
    name: str = Field(validation_alias=AliasChoices("nombre", "name"))
    price: Decimal = Field(validation_alias=AliasChoices("precio", "price"))
    components: list[ComboComponentDto] = Field(
        default_factory=list,
        validation_alias=AliasChoices("productos", "components"),
    )
    active: bool = Field(default=True, validation_alias=AliasChoices("estaActivo", "estado", "active"))
    description: str = Field(default="", validation_alias=AliasChoices("descripcion", "description"))

    def to_domain(self) -> Combo:
        return Combo(
            id=self.id,
            name=self.name,
            price=self.price,
            components=tuple(
                ComboComponent(c.product_id, c.quantity_lb) for c in self.components
            ),
            active=self.active,
            description=self.description,
        )


class StockCheckDto(_Dto):
    has_stock: bool = Field(validation_alias=AliasChoices("hasStock", "has_stock"))


# ═══════════════════════════════════════════════════════════════════════════════
# Sales
# ═══════════════════════════════════════════════════════════════════════════════


class SaleDetailRequestDto(_Dto):
    kind: ItemKind = Field(serialization_alias="tipoItem")
    product_id: int | None = Field(default=None, serialization_alias="productoId")
    combo_id: int | None = Field(default=None, serialization_alias="comboId")
    quantity: JsonDecimal = Field(serialization_alias="cantidad")


class SaleRequestDto(_Dto):
    customer: str = Field(serialization_alias="cliente")
    notes: str = Field(default="", serialization_alias="observaciones")
    type: SaleType = Field(default=SaleType.NORMAL, serialization_alias="tipo")
    details: list[SaleDetailRequestDto] = Field(serialization_alias="detalles")

    @classmethod
    def from_domain(cls, request: SaleRequest) -> SaleRequestDto:
        details: list[SaleDetailRequestDto] = []
        for line in request.lines:
            match line.kind:
                case ItemKind.PRODUCT:
                    details.append(SaleDetailRequestDto(
                        kind=line.kind, product_id=line.item_id, quantity=line.quantity,
                    ))
                case ItemKind.COMBO:
                    details.append(SaleDetailRequestDto(
                        kind=line.kind, combo_id=line.item_id, quantity=line.quantity,
                    ))
        return cls(
            customer=request.customer,
            notes=request.notes,
            type=request.type,
            details=details,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SaleDetailDto(_Dto):
    kind: ItemKind = Field(validation_alias=AliasChoices("tipoItem", "kind"))
    item_id: int = Field(validation_alias=AliasChoices("itemId", "productoId", "comboId", "item_id"))
    name: str = Field(default="", validation_alias=AliasChoices("nombre", "name"))
    quantity: Decimal = Field(validation_alias=AliasChoices("cantidad", "quantity"))
    unit_price: Decimal = Field(validation_alias=AliasChoices("precioUnitario", "unit_price"))
    subtotal: Decimal = Field(validation_alias=AliasChoices("subtotal",))

    def to_domain(self) -> SaleDetail:
        return SaleDetail(
            kind=self.kind,
            item_id=self.item_id,
            name=self.name,
            quantity=self.quantity,
            unit_price=self.unit_price,
            subtotal=self.subtotal,
        )


class SaleRecordDto(_Dto):
    id: int = Field(validation_alias=AliasChoices("ventaId", "id"))
    customer: str = Field(default="", validation_alias=AliasChoices("cliente", "customer"))
    notes: str | None = Field(default="", validation_alias=AliasChoices("observaciones", "notes"))
    sold_at: str | None = Field(default=None, validation_alias=AliasChoices("fechaVenta", "fecha", "sold_at"))
    total: Decimal = Field(validation_alias=AliasChoices("total",))
    details: list[SaleDetailDto] = Field(
        default_factory=list,
        validation_alias=AliasChoices("detalles", "items", "details"),
    )
    type: SaleType = Field(default=SaleType.NORMAL, validation_alias=AliasChoices("tipo", "type"))

    def to_domain(self) -> SaleRecord:
        return SaleRecord(
            id=self.id,
            customer=self.customer,
            total=self.total,
            sold_at=self.sold_at,
            notes=self.notes or "",
            details=tuple(d.to_domain() for d in self.details),
            type=self.type,
        )


class DailyTotalsDto(_Dto):
    sale_count: int = Field(default=0, validation_alias=AliasChoices("totalVentas", "sale_count"))
    amount: Decimal = Field(default=Decimal(0), validation_alias=AliasChoices("montoTotal", "amount"))

    def to_domain(self, day: date) -> DailyTotals:
        return DailyTotals(day=day, sale_count=self.sale_count, amount=self.amount)


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing
# ═══════════════════════════════════════════════════════════════════════════════


def parse_one[D: _Dto](dto: type[D], body: object) -> D:
    """Validate a single object. Raises ValidationError on a bad shape."""
    return dto.model_validate(body)


def parse_list[D: _Dto](dto: type[D], body: object) -> list[D]:
    """
    Validate a list body entry by entry.

    A non-list body raises TypeError. Bad entries are dropped and logged,
    the rest of the list is kept.
    """
    if not isinstance(body, list):
        raise TypeError(f"expected a JSON list, got {type(body).__name__}")

    parsed: list[D] = []
    for index, entry in enumerate(body):
        try:
            parsed.append(dto.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                "Dropping malformed %s at index %d: %s",
                dto.__name__, index, e.errors(include_url=False),
            )
    return parsed


__all__ = (
    "ProductDto",
    "ComboComponentDto",
    "ComboDto",
    "StockCheckDto",
    "SaleDetailRequestDto",
    "SaleRequestDto",
    "SaleDetailDto",
    "SaleRecordDto",
    "DailyTotalsDto",
    "parse_one",
    "parse_list",
)
