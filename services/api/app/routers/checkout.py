from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.checkout_v1 import PostalErrorV1
from services.api.app.db.database import get_db
from services.api.app.models.checkout import (
    CheckoutStartRequest,
    CheckoutView,
    DeliveryModeRequest,
    DispatchResponse,
    DraftUpdateRequest,
    PostalCodeRequest,
    SummaryResponse,
)
from services.api.app.services.address_resolver import try_resolve
from services.api.app.services.channel_factory import get_channel_opener
from services.api.app.services.composer import compose
from services.api.app.services.dispatcher import dispatch
from services.api.app.services.formatting import mask_phone, mask_postal_code
from services.api.app.services.postal_factory import get_postal_directory
from services.api.app.services.sessions import CheckoutSession, store
from services.api.app.services.store_config import load_store_config
from services.api.app.services.validator import (
    field_errors,
    is_economically_valid,
    is_structurally_valid,
    minimum_shortfall,
    order_totals,
)
from sqlalchemy.orm import Session

router = APIRouter()


@router.post("/v1/checkout", response_model=CheckoutView)
def begin_checkout(payload: CheckoutStartRequest, db: Session = Depends(get_db)) -> CheckoutView:
    session = CheckoutSession(
        checkout_id=uuid4().hex,
        cart=payload.cart,
        config=load_store_config(db),
    )
    store.save(session)
    return _to_view(session)


@router.get("/v1/checkout/{checkout_id}", response_model=CheckoutView)
def get_checkout(checkout_id: str) -> CheckoutView:
    return _to_view(_get_session(checkout_id))


@router.post("/v1/checkout/{checkout_id}/mode", response_model=CheckoutView)
def select_delivery_mode(checkout_id: str, payload: DeliveryModeRequest) -> CheckoutView:
    session = _get_session(checkout_id)
    session.select_mode(payload.delivery_mode)
    return _to_view(session)


@router.patch("/v1/checkout/{checkout_id}/draft", response_model=CheckoutView)
def update_draft(checkout_id: str, payload: DraftUpdateRequest) -> CheckoutView:
    session = _get_session(checkout_id)

    changes = payload.model_dump(exclude_none=True)
    if "customer_phone" in changes:
        changes["customer_phone"] = mask_phone(changes["customer_phone"])

    session.update_fields(changes)
    return _to_view(session)


@router.post("/v1/checkout/{checkout_id}/postal-code", response_model=CheckoutView)
def edit_postal_code(checkout_id: str, payload: PostalCodeRequest) -> CheckoutView:
    session = _get_session(checkout_id)

    try:
        directory = get_postal_directory()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    raw = mask_postal_code(payload.postal_code)
    ticket = session.edit_postal_code(raw)
    session.settle_lookup(ticket, try_resolve(raw, directory))
    return _to_view(session)


@router.get("/v1/checkout/{checkout_id}/summary", response_model=SummaryResponse)
def get_summary(checkout_id: str) -> SummaryResponse:
    session = _get_session(checkout_id)
    draft, _ = session.snapshot()
    return SummaryResponse(text=compose(session.cart, draft, session.config))


@router.post("/v1/checkout/{checkout_id}/dispatch", response_model=DispatchResponse)
def dispatch_order(checkout_id: str) -> DispatchResponse:
    session = _get_session(checkout_id)

    # One snapshot for both the gates and the text.
    draft, _ = session.snapshot()
    blocked: list[str] = []
    if not is_structurally_valid(draft):
        blocked.append("incomplete delivery details")
    if not is_economically_valid(session.cart, session.config):
        blocked.append("minimum order value not reached")
    if blocked:
        raise HTTPException(status_code=409, detail=f"Dispatch disabled: {', '.join(blocked)}")

    try:
        opener = get_channel_opener()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    text = compose(session.cart, draft, session.config)
    url = dispatch(text, session.config, opener)
    store.discard(checkout_id)
    return DispatchResponse(dispatch_url=url, text=text)


def _get_session(checkout_id: str) -> CheckoutSession:
    session = store.get(checkout_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Checkout not found")
    return session


def _to_view(session: CheckoutSession) -> CheckoutView:
    draft, postal_error = session.snapshot()
    subtotal, fee, total = order_totals(session.cart, draft, session.config)
    structurally_valid = is_structurally_valid(draft)
    economically_valid = is_economically_valid(session.cart, session.config)

    return CheckoutView(
        checkout_id=session.checkout_id,
        draft=draft,
        items=list(session.cart.items),
        store=session.config,
        subtotal=subtotal,
        delivery_fee=fee,
        total=total,
        minimum_order_value=session.config.minimum_order_value,
        minimum_shortfall=minimum_shortfall(session.cart, session.config),
        structurally_valid=structurally_valid,
        economically_valid=economically_valid,
        can_dispatch=structurally_valid and economically_valid,
        field_errors=field_errors(draft),
        postal_error=(
            PostalErrorV1(kind=postal_error.kind, message=str(postal_error))
            if postal_error is not None
            else None
        ),
    )
