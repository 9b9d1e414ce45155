import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_gateway, get_payment_store
from app.gateways.payhere import PayHereGateway
from app.main import create_application
from app.services.payment_store import InMemoryPaymentStore


MERCHANT_ID = "1211149"
MERCHANT_SECRET = "test-merchant-secret-8Qw2"


@pytest.fixture
def merchant_secret():
    return MERCHANT_SECRET


@pytest.fixture
def gateway():
    return PayHereGateway(merchant_id=MERCHANT_ID, merchant_secret=MERCHANT_SECRET)


@pytest.fixture
def store():
    return InMemoryPaymentStore()


@pytest.fixture
def client(gateway, store):
    application = create_application()
    application.dependency_overrides[get_gateway] = lambda: gateway
    application.dependency_overrides[get_payment_store] = lambda: store
    with TestClient(application) as test_client:
        yield test_client
    application.dependency_overrides.clear()


@pytest.fixture
def make_notification(gateway):
    """Build a PayHere notification signed with the test merchant secret."""

    def _make(order_id="ORDER_1718000000000_TEST01", status_code="2", **overrides):
        fields = {
            "merchant_id": MERCHANT_ID,
            "order_id": order_id,
            "payment_id": "320025071278",
            "payhere_amount": "1500.00",
            "payhere_currency": "LKR",
            "status_code": status_code,
            "custom_1": "customer-42",
            "method": "VISA",
            "status_message": "Successfully completed the payment.",
            "card_holder_name": "Nimal Perera",
            "card_no": "************1292",
            "card_expiry": "12/30",
        }
        fields.update({k: v for k, v in overrides.items() if k != "md5sig"})
        fields["md5sig"] = gateway.notification_signature(
            fields["merchant_id"],
            fields["order_id"],
            fields["payhere_amount"],
            fields["payhere_currency"],
            fields["status_code"],
        )
        if "md5sig" in overrides:
            fields["md5sig"] = overrides["md5sig"]
        return fields

    return _make
