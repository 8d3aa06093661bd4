import itertools
import os
import tempfile
from contextlib import asynccontextmanager
from types import SimpleNamespace

# must be set before the settings and the engine are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./events.db")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="dosomething-uploads-"))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dosomething.auth import AuthenticatedUser, get_current_user  # noqa: E402
from dosomething.config.database import async_session_manager, engine  # noqa: E402
from dosomething.main import app  # noqa: E402
from dosomething.models.all import metadata  # noqa: E402
from dosomething.models.channels import Channel  # noqa: E402
from dosomething.models.user import User  # noqa: E402
from dosomething.notifications.channels import (  # noqa: E402
    NotificationChannelAdapter,
    NotificationDispatcher,
    get_notification_dispatcher,
)
from dosomething.tests.inmemory_services import (  # noqa: E402
    RecordingEmailService,
    RecordingSmsService,
)


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)


@pytest.fixture
def client_factory():
    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as client:
        yield client


@pytest.fixture
def make_user():
    counter = itertools.count(1)

    async def factory(
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        email: str | None = None,
        phone: str | None = None,
        notify: Channel = Channel.EMAIL,
    ) -> AuthenticatedUser:
        n = next(counter)
        async with async_session_manager() as session:
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email or f"user{n}@example.com",
                phone=phone or f"555000{n:04d}",
                notify=notify,
            )
            session.add(user)
            await session.flush()
            return AuthenticatedUser.from_user(user)

    return factory


@pytest.fixture
def login():
    """Overrides mapping that authenticates every request as ``user``."""

    def factory(user: AuthenticatedUser) -> dict:
        return {get_current_user: lambda: user}

    return factory


@pytest.fixture
def outbox():
    return SimpleNamespace(email=RecordingEmailService(), sms=RecordingSmsService())


@pytest.fixture
def dispatcher_override(outbox):
    """Overrides mapping that delivers into ``outbox`` instead of real providers."""
    dispatcher = NotificationDispatcher(NotificationChannelAdapter(outbox.email, outbox.sms))
    return {get_notification_dispatcher: lambda: dispatcher}
