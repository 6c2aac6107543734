# paperdesk/conftest.py
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add repository root to PYTHONPATH
REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from paperdesk.context import AppContext  # noqa: E402
from paperdesk.main import create_app  # noqa: E402
from paperdesk.tests.fakes import (  # noqa: E402
    FakeBillingProvider,
    FakeEmailProvider,
    FakeIdentityProvider,
    make_settings,
)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_billing():
    return FakeBillingProvider()


@pytest.fixture
def fake_email():
    return FakeEmailProvider()


@pytest.fixture
def fake_identity():
    return FakeIdentityProvider(users={"uid_alice"})


@pytest.fixture
def app_context(settings, fake_billing, fake_email):
    return AppContext(settings=settings, billing=fake_billing, email=fake_email)


@pytest.fixture
def client(app_context):
    with TestClient(create_app(context=app_context)) as c:
        yield c


@pytest.fixture
def identity_client(fake_billing, fake_email, fake_identity):
    """Client for the identity variant (delete-user routes mounted)."""
    ctx = AppContext(
        settings=make_settings(IDENTITY_ENABLED=True, FIREBASE_SERVICE_ACCOUNT='{"type": "service_account"}'),
        billing=fake_billing,
        email=fake_email,
        identity=fake_identity,
    )
    with TestClient(create_app(context=ctx)) as c:
        yield c
