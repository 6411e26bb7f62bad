import uuid
from models.payment_methods import PaymentMethod
from utils.logger import get_logger

logger = get_logger(__name__)


class MockPaymentProvider:
    """
    Simulated payment gateway. It talks to nothing: every authorization of an
    active method succeeds and returns a fresh opaque transaction reference.
    """

    name = "MOCK"

    def authorize(self, payment_method: PaymentMethod, amount_cents: int, currency: str) -> str:
        reference = f"mock_txn_{uuid.uuid4()}"
        logger.debug(
            "Mock authorization issued",
            extra={"payment_method_id": payment_method.id, "amount_cents": amount_cents,
                   "currency": currency, "provider_reference": reference}
        )
        return reference


payment_provider = MockPaymentProvider()
