import random
from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.payment_methods import PaymentMethod
from models.enums import PaymentProvider
from schemas.payment_schemas import CreatePaymentMethodRequest, UpdatePaymentMethodRequest
from services.scope_service import AccessScope, require_admin
from utils.logger import get_logger

logger = get_logger(__name__)


def generate_mock_last4() -> str:
    return f"{random.randint(0, 9999):04d}"


class PaymentMethodService:

    @staticmethod
    def list_active(db: Session) -> list[PaymentMethod]:
        return (
            db.query(PaymentMethod)
            .filter(PaymentMethod.active == True)
            .order_by(PaymentMethod.is_default.desc(), PaymentMethod.created_at)
            .all()
        )

    @staticmethod
    def _clear_default(db: Session):
        db.query(PaymentMethod).filter(PaymentMethod.is_default == True).update(
            {PaymentMethod.is_default: False}, synchronize_session="fetch"
        )

    @staticmethod
    def create(db: Session, scope: AccessScope, body: CreatePaymentMethodRequest) -> PaymentMethod:
        """
        Register a MOCK payment method. Only one method can be the default,
        so making this one the default clears the flag everywhere else.
        """
        require_admin(scope, "create_payment_method")

        if body.is_default:
            PaymentMethodService._clear_default(db)

        model = PaymentMethod(
            provider=PaymentProvider.MOCK,
            label=body.label,
            brand="MOCK",
            last4=body.last4 or generate_mock_last4(),
            exp_month=body.exp_month,
            exp_year=body.exp_year,
            country=body.country,
            active=True,
            is_default=body.is_default,
            created_by_user_id=scope.user_id
        )

        db.add(model)
        db.commit()
        db.refresh(model)

        logger.info(
            "Payment method created",
            extra={**scope.log_context(), "payment_method_id": model.id, "label": model.label}
        )
        return model

    @staticmethod
    def update(db: Session, scope: AccessScope, payment_method_id: str, body: UpdatePaymentMethodRequest) -> PaymentMethod:
        require_admin(scope, "update_payment_method")

        model = db.query(PaymentMethod).filter(PaymentMethod.id == payment_method_id).one_or_none()
        if not model:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Payment method not found")

        if body.is_default is True:
            PaymentMethodService._clear_default(db)

        for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(model, field, value)

        db.commit()
        db.refresh(model)

        logger.info(
            "Payment method updated",
            extra={**scope.log_context(), "payment_method_id": model.id,
                   "updates": body.model_dump(exclude_unset=True, exclude_none=True)}
        )
        return model
