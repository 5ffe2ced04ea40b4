"""
Pytest configuration and fixtures for PAYLENS tests.
"""

import pytest

from app.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Make every test read settings fresh from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a gateway token and an AI key configured."""
    return Settings(
        paystack_jwt="test-paystack-jwt",
        paystack_endpoint="https://studio-api.paystack.test/transaction?reduced_fields=true",
        openai_api_key="sk-test",
        chat_default_model="gpt-4o",
        chat_max_steps=4,
    )


@pytest.fixture
def paystack_envelope() -> dict:
    """Sample Paystack transaction listing response."""
    return {
        "status": True,
        "message": "Transactions retrieved",
        "data": [
            {
                "id": 4099260516,
                "reference": "re4lyvq3s3",
                "amount": 40333,
                "currency": "NGN",
                "status": "success",
                "gateway_response": "Successful",
                "createdAt": "2024-08-22T09:15:02.000Z",
                "customer": {
                    "email": "ada@example.com",
                    "first_name": "Ada",
                    "last_name": "Obi",
                    "phone": None,
                },
                "authorization": {"account_name": None, "card_type": "visa"},
            },
            {
                "id": 4099260517,
                "reference": "ab12cd34",
                "amount": 15000,
                "currency": "NGN",
                "status": "failed",
                "gateway_response": "Declined",
                "createdAt": "2024-08-22T10:01:44.000Z",
                "customer": {
                    "email": "tunde@example.com",
                    "first_name": "Tunde",
                    "last_name": None,
                    "phone": "+2348000000000",
                },
            },
            {
                "id": 4099260518,
                "reference": "zz99yy88",
                "amount": 5000,
                "currency": "NGN",
                "status": "abandoned",
                "createdAt": "2024-08-22T11:30:00.000Z",
                "customer": {"email": "ada@example.com"},
                "log": {"errors": [], "message": "Customer closed the checkout"},
            },
        ],
        "meta": {
            "total": 3,
            "total_volume": 60333,
            "per_page": 25,
            "page": 1,
            "page_count": 1,
        },
    }
