"""Tip transaction endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Query, status
from sqlalchemy import or_

from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import InvocationContext, TransactionArgs
from myriad_api.models import Transaction
from myriad_api.repositories import TransactionRepository
from myriad_api.schemas.transaction import TransactionCreate, TransactionResponse

from ..dependencies import CreateInterceptorDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Transaction:
    """Record a tip sent by the current user."""

    async def create(ctx: InvocationContext) -> Transaction:
        return TransactionRepository(db).create(**asdict(ctx.args))

    args = TransactionArgs(
        from_=current_user.id,
        to=payload.to,
        hash=payload.hash,
        amount=payload.amount,
        currency_id=payload.currency_id,
        type=payload.type.value if payload.type else None,
        reference_id=payload.reference_id,
    )
    ctx = InvocationContext(EntityKind.TRANSACTION, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    db: SessionDep,
    user_id: str | None = Query(None, alias="userId", description="Sender or recipient"),
    reference_id: str | None = Query(None, alias="referenceId"),
    limit: int = Query(50, ge=1, le=100),
) -> list[Transaction]:
    criteria = []
    if user_id is not None:
        criteria.append(or_(Transaction.from_ == user_id, Transaction.to == user_id))
    if reference_id is not None:
        criteria.append(Transaction.reference_id == reference_id)
    return TransactionRepository(db).find(
        *criteria, order_by=Transaction.created_at.desc(), limit=limit
    )
