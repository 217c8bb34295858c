from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Success

from retail_checkout.core.domain.model.errors import (
    CartConsumed,
    CheckoutError,
    EmptyCart,
    Expired,
    InsufficientFunds,
    NotFound,
    OutOfStock,
    ValidationError,
)
from retail_checkout.core.domain.model.receipt import Receipt
from retail_checkout.core.ports.inbound.carts import (
    AddToCartCommand,
    AddToCartUseCase,
    CartView,
    GetCartQuery,
    GetCartUseCase,
    OpenCartCommand,
    OpenCartUseCase,
)
from retail_checkout.core.ports.inbound.checkout import (
    CheckoutCommand,
    CheckoutUseCase,
)
from retail_checkout.core.ports.inbound.list_products import ListProductsUseCase

logger = structlog.get_logger(__name__)

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class OpenCartRequest(BaseModel):
    customer_id: str = Field(min_length=1, examples=["c-1"])


class AddItemRequest(BaseModel):
    product: str = Field(min_length=1, examples=["Cheese"])
    quantity: int = Field(gt=0, examples=[2])


class CheckoutRequest(BaseModel):
    customer_id: str = Field(min_length=1, examples=["c-1"])


class ProductOut(BaseModel):
    name: str
    price: str
    stock: int
    weight: str
    needs_shipping: bool
    expires_on: str | None
    expired: bool


class CartLineOut(BaseModel):
    product: str
    unit_price: str
    quantity: int
    total: str


class CartResponse(BaseModel):
    cart_id: str
    customer_id: str
    status: str
    subtotal: str
    lines: list[CartLineOut]


class ReceiptLineOut(BaseModel):
    product: str
    quantity: int
    unit_price: str
    total: str
    display_total: int


class ShipmentLineOut(BaseModel):
    product: str
    quantity: int
    grams: int


class ShipmentOut(BaseModel):
    lines: list[ShipmentLineOut]
    total_weight_kg: str


class ReceiptResponse(BaseModel):
    cart_id: str
    customer_id: str
    lines: list[ReceiptLineOut]
    shipment: ShipmentOut
    subtotal: str
    shipping_fee: str
    total: str
    balance_after: str


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


def _map_error_to_http(err: CheckoutError) -> tuple[int, ErrorResponse]:
    body = ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, ValidationError):
        return 400, body

    if isinstance(err, NotFound):
        return 404, body

    if isinstance(err, InsufficientFunds):
        return 402, body

    if isinstance(err, (OutOfStock, Expired, EmptyCart, CartConsumed)):
        return 409, body

    return 500, body


def _cart_out(view: CartView) -> CartResponse:
    return CartResponse(
        cart_id=str(view.cart_id.value),
        customer_id=view.customer_id.value,
        status=view.status.value,
        subtotal=str(view.subtotal.amount),
        lines=[
            CartLineOut(
                product=ln.product,
                unit_price=str(ln.unit_price.amount),
                quantity=ln.quantity,
                total=str(ln.total.amount),
            )
            for ln in view.lines
        ],
    )


def _receipt_out(receipt: Receipt) -> ReceiptResponse:
    return ReceiptResponse(
        cart_id=str(receipt.cart_id.value),
        customer_id=receipt.customer_id.value,
        lines=[
            ReceiptLineOut(
                product=ln.name,
                quantity=ln.quantity,
                unit_price=str(ln.unit_price.amount),
                total=str(ln.total.amount),
                display_total=ln.display_total,
            )
            for ln in receipt.lines
        ],
        shipment=ShipmentOut(
            lines=[
                ShipmentLineOut(product=ln.name, quantity=ln.quantity, grams=ln.grams)
                for ln in receipt.shipment.lines
            ],
            total_weight_kg=str(receipt.shipment.total_weight_kg),
        ),
        subtotal=str(receipt.subtotal.amount),
        shipping_fee=str(receipt.shipping_fee.amount),
        total=str(receipt.total.amount),
        balance_after=str(receipt.balance_after.amount),
    )


def create_app(
    open_cart_uc: OpenCartUseCase,
    add_to_cart_uc: AddToCartUseCase,
    get_cart_uc: GetCartUseCase,
    checkout_uc: CheckoutUseCase,
    list_products_uc: ListProductsUseCase,
) -> FastAPI:
    app = FastAPI(title="retail_checkout")

    # --- exception handlers -------------------------------------------------

    @app.exception_handler(CheckoutError)
    async def handle_domain_error(_: Request, exc: CheckoutError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("http.unexpected_error", error=type(exc).__name__)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/products", response_model=list[ProductOut])
    def list_products() -> Any:
        result = list_products_uc.list_products()

        if isinstance(result, Success):
            return [
                ProductOut(
                    name=p.name,
                    price=str(p.price.amount),
                    stock=p.stock,
                    weight=str(p.weight),
                    needs_shipping=p.needs_shipping,
                    expires_on=p.expires_on.isoformat() if p.expires_on else None,
                    expired=p.expired,
                )
                for p in result.unwrap()
            ]

        raise result.failure()

    @app.post(
        "/carts",
        response_model=CartResponse,
        status_code=201,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
        },
    )
    def open_cart(req: OpenCartRequest, response: Response) -> Any:
        result = open_cart_uc.open_cart(OpenCartCommand(customer_id=req.customer_id))

        if isinstance(result, Success):
            out = _cart_out(result.unwrap())
            response.headers["Location"] = f"/carts/{out.cart_id}"
            return out

        raise result.failure()

    @app.get(
        "/carts/{cart_id}",
        response_model=CartResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
        },
    )
    def get_cart(cart_id: str) -> Any:
        result = get_cart_uc.get_cart(GetCartQuery(cart_id=cart_id))

        if isinstance(result, Success):
            return _cart_out(result.unwrap())

        raise result.failure()

    @app.post(
        "/carts/{cart_id}/items",
        response_model=CartResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
    )
    def add_item(cart_id: str, req: AddItemRequest) -> Any:
        result = add_to_cart_uc.add_to_cart(
            AddToCartCommand(cart_id=cart_id, product=req.product, quantity=req.quantity)
        )

        if isinstance(result, Success):
            return _cart_out(result.unwrap())

        raise result.failure()

    @app.post(
        "/carts/{cart_id}/checkout",
        response_model=ReceiptResponse,
        responses={
            400: {"model": ErrorResponse},
            402: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
    )
    def checkout(cart_id: str, req: CheckoutRequest) -> Any:
        result = checkout_uc.checkout(
            CheckoutCommand(customer_id=req.customer_id, cart_id=cart_id)
        )

        if isinstance(result, Success):
            return _receipt_out(result.unwrap())

        raise result.failure()

    return app
