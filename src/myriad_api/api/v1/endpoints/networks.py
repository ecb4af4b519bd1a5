"""Network and currency endpoints."""

import logging

from fastapi import APIRouter, Query, Response, status

from myriad_api.core.errors import ConflictRejection
from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import InvocationContext, NetworkCurrencyArgs
from myriad_api.models import Currency, Network
from myriad_api.repositories import (
    CurrencyRepository,
    NetworkRepository,
    TransactionRepository,
    UserCurrencyRepository,
)
from myriad_api.schemas.wallet import (
    CurrencyCreate,
    CurrencyResponse,
    CurrencyUpdate,
    NetworkCreate,
    NetworkResponse,
)

from ..dependencies import CreateInterceptorDep, CurrentUserDep, SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["networks"])


@router.post("/networks", response_model=NetworkResponse, status_code=status.HTTP_201_CREATED)
async def create_network(
    payload: NetworkCreate, current_user: CurrentUserDep, db: SessionDep
) -> Network:
    networks = NetworkRepository(db)
    if networks.exists(payload.id):
        raise ConflictRejection("Network already exist")
    network = networks.create(**payload.model_dump())
    db.commit()
    return network


@router.get("/networks", response_model=list[NetworkResponse])
async def list_networks(db: SessionDep) -> list[Network]:
    return NetworkRepository(db).find(order_by=Network.id)


@router.post(
    "/networks/{network_id}/currencies",
    response_model=CurrencyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_currency(
    network_id: str,
    payload: CurrencyCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Currency:
    """Add a token to a network after verifying its contract on chain."""

    async def create(ctx: InvocationContext) -> Currency:
        args = ctx.args
        return CurrencyRepository(db).create(
            **args.currency,
            image=args.image or "",
            exchange_rate=args.exchange_rate,
        )

    args = NetworkCurrencyArgs(
        network_id=network_id,
        reference_id=payload.reference_id,
        image=payload.image,
        exchange_rate=payload.exchange_rate,
    )
    ctx = InvocationContext(EntityKind.NETWORK_CURRENCY, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.get("/currencies", response_model=list[CurrencyResponse])
async def list_currencies(
    db: SessionDep,
    network_id: str | None = Query(None, alias="networkId"),
) -> list[Currency]:
    where = {"network_id": network_id} if network_id else {}
    return CurrencyRepository(db).find(order_by=Currency.symbol, **where)


@router.get("/currencies/{currency_id}", response_model=CurrencyResponse)
async def get_currency(currency_id: str, db: SessionDep) -> Currency:
    return CurrencyRepository(db).find_by_id(currency_id.lower())


@router.patch("/currencies/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_currency(
    currency_id: str, payload: CurrencyUpdate, current_user: CurrentUserDep, db: SessionDep
) -> Response:
    """Change a currency's display image or exchange rate."""
    currency_id = currency_id.lower()
    currencies = CurrencyRepository(db)
    currencies.find_by_id(currency_id)
    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if values:
        currencies.update_by_id(currency_id, **values)
        db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/currencies/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_currency(
    currency_id: str, current_user: CurrentUserDep, db: SessionDep
) -> Response:
    """Remove a currency and drop it from every user's tracked list.

    Currencies referenced by a tip cannot be deleted.
    """
    currency_id = currency_id.lower()
    CurrencyRepository(db).find_by_id(currency_id)
    if TransactionRepository(db).find_one(currency_id=currency_id):
        raise ConflictRejection("Currency already used in transactions")

    owned = UserCurrencyRepository(db)
    for row in owned.find(currency_id=currency_id):
        owned.delete_by_id(row.id)
    CurrencyRepository(db).delete_by_id(currency_id)
    db.commit()
    logger.info("Currency %s deleted", currency_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
