from fastapi import APIRouter, Request, status
from utils.deps import db_dependency, scope_dependency
from schemas.payment_schemas import (CreatePaymentMethodRequest, UpdatePaymentMethodRequest,
    PaymentMethodResponse)
from services.payment_method_service import PaymentMethodService
from middleware.rate_limiter import limiter


router = APIRouter(
    prefix="/payment-methods",
    tags=["payment-methods"]
)


@router.get("", status_code=status.HTTP_200_OK, response_model=list[PaymentMethodResponse])
async def list_payment_methods(scope: scope_dependency, db: db_dependency):
    """
    Active payment methods, default first.
    """
    return PaymentMethodService.list_active(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PaymentMethodResponse)
@limiter.limit("10/minute")
async def create_payment_method(request: Request, body: CreatePaymentMethodRequest,
    scope: scope_dependency, db: db_dependency):
    return PaymentMethodService.create(db, scope, body)


@router.patch("/{payment_method_id}", status_code=status.HTTP_200_OK, response_model=PaymentMethodResponse)
@limiter.limit("10/minute")
async def update_payment_method(request: Request, payment_method_id: str, body: UpdatePaymentMethodRequest,
    scope: scope_dependency, db: db_dependency):
    return PaymentMethodService.update(db, scope, payment_method_id, body)
