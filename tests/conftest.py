"""
Shared pytest fixtures for all tests.

Provides environment defaults, a fixed clock, actors and AsyncMock
repositories/gateways shaped after the application ports.
"""

import os
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings are read lazily; these must be set before the first get_settings()
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("EMAIL_ENABLED", "false")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")

from tests.utils import FIXED_NOW, create_admin, create_customer  # noqa: E402

# ============================================================================
# CLOCK & ACTORS
# ============================================================================


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def return_window():
    return timedelta(days=14)


@pytest.fixture
def customer():
    return create_customer()


@pytest.fixture
def other_customer():
    return create_customer("user-2")


@pytest.fixture
def admin():
    return create_admin()


# ============================================================================
# REPOSITORY MOCKS
# ============================================================================


def _echo_repository() -> AsyncMock:
    """Repository mock whose create/update return the entity they were given."""
    repo = AsyncMock()

    async def _create(entity):
        if entity.id is None:
            entity.id = f"{type(entity).__name__.lower()}-new"
        return entity

    async def _update(entity):
        return entity

    repo.create.side_effect = _create
    repo.update.side_effect = _update
    repo.delete.return_value = True
    return repo


@pytest.fixture
def mock_order_repository():
    return _echo_repository()


@pytest.fixture
def mock_cart_repository():
    return _echo_repository()


@pytest.fixture
def mock_product_repository():
    return _echo_repository()


@pytest.fixture
def mock_package_repository():
    return _echo_repository()


@pytest.fixture
def mock_ticket_repository():
    return _echo_repository()


@pytest.fixture
def mock_claim_repository():
    return _echo_repository()


@pytest.fixture
def mock_category_repository():
    repo = _echo_repository()
    repo.count.return_value = 0
    return repo


@pytest.fixture
def mock_shipping_method_repository():
    return _echo_repository()


# ============================================================================
# GATEWAY MOCKS
# ============================================================================


@pytest.fixture
def mock_payment_gateway():
    return AsyncMock()


@pytest.fixture
def mock_carrier_service():
    service = AsyncMock()
    service.supports_carrier = MagicMock(return_value=True)
    service.get_tracking_url = MagicMock(
        side_effect=lambda carrier, tn: f"https://track.example.com/{tn}"
    )
    return service


@pytest.fixture
def mock_email_sender():
    return AsyncMock()
