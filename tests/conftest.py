"""
Shared fixtures: test database, application client and outbound fakes
"""

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, build_engine
from app.models import Event
from app.services.admin_service import AdminService
from app.services.openai_service import OpenAIService
from app.services.session_service import SessionStore
from app.services.unsplash_service import UnsplashService
from app.utils.security import rate_limiter
from main import create_app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_trivia.db"
engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"

UNSPLASH_PHOTOS = {
    "abc123": {
        "id": "abc123",
        "description": "Rows of vines at sunset",
        "alt_description": "vineyard",
        "width": 4000,
        "height": 3000,
        "color": "#a6592d",
        "urls": {
            "raw": "https://images.unsplash.com/abc123?raw",
            "full": "https://images.unsplash.com/abc123?full",
            "regular": "https://images.unsplash.com/abc123?regular",
            "small": "https://images.unsplash.com/abc123?small",
            "thumb": "https://images.unsplash.com/abc123?thumb",
        },
        "links": {
            "html": "https://unsplash.com/photos/abc123",
            "download_location": "https://api.unsplash.com/photos/abc123/download",
        },
        "user": {
            "name": "Ana Vine",
            "links": {"html": "https://unsplash.com/@anavine"},
        },
    },
    "xyz789": {
        "id": "xyz789",
        "description": None,
        "alt_description": None,
        "width": 1200,
        "height": 800,
        "color": None,
        "urls": {"regular": "https://images.unsplash.com/xyz789?regular"},
        "links": {"download_location": "https://api.unsplash.com/photos/xyz789/download"},
        "user": {},
    },
}


class FakeClock:
    """Settable clock for code that accepts a ``clock`` callable"""

    def __init__(self, now=None):
        self.now = now or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``"""

    def __init__(self, content):
        self.content = content
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai_client(content):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content)))


def generated_questions_json(count=2):
    return json.dumps([
        {
            "question": f"Which grape is question {i} about?",
            "options": ["Merlot", "Syrah", "Riesling", "Malbec"],
            "correctAnswer": "Merlot",
            "explanation": "Merlot is the answer.",
            "difficulty": "easy",
            "category": "Wine",
        }
        for i in range(1, count + 1)
    ])


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter.clear()
    yield
    rate_limiter.clear()


@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    AdminService.ensure_default_roles(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def unsplash_requests():
    return []


@pytest.fixture
def unsplash_service(unsplash_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        unsplash_requests.append(request)
        path = request.url.path

        if path.endswith("/download"):
            return httpx.Response(200, json={"url": "https://images.unsplash.com/download"})
        if path == "/search/photos":
            photos = list(UNSPLASH_PHOTOS.values())
            return httpx.Response(200, json={"total": len(photos), "total_pages": 1, "results": photos})
        if path == "/photos":
            return httpx.Response(200, json=[UNSPLASH_PHOTOS["abc123"]])
        if path.startswith("/photos/"):
            photo = UNSPLASH_PHOTOS.get(path.rsplit("/", 1)[-1])
            if photo is None:
                return httpx.Response(404, json={"errors": ["Couldn't find Photo"]})
            return httpx.Response(200, json=photo)
        return httpx.Response(404)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.unsplash.com")
    return UnsplashService(client=client)


@pytest.fixture
def openai_client():
    return fake_openai_client(generated_questions_json())


@pytest.fixture
def session_clock():
    return FakeClock()


@pytest.fixture
def app(db_session, unsplash_service, openai_client, session_clock):
    return create_app(
        session_factory=TestingSessionLocal,
        session_store=SessionStore(ttl=timedelta(hours=24), clock=session_clock),
        openai_service=OpenAIService(client=openai_client),
        unsplash_service=unsplash_service
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def host(db_session):
    """A regular signed-up user who hosts events"""
    return AdminService.create_user(db_session, "host", "host@example.com", PASSWORD, "Host User")


@pytest.fixture
def other_host(db_session):
    return AdminService.create_user(db_session, "other", "other@example.com", PASSWORD, "Other Host")


@pytest.fixture
def admin(db_session):
    user = AdminService.create_user(db_session, "admin", "admin@example.com", PASSWORD, "Admin User")
    return AdminService.promote_to_admin(db_session, user.id)


@pytest.fixture
def login(client):
    """Sign the test client in as the given user"""
    def _login(username, password=PASSWORD):
        client.cookies.clear()
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()
    return _login


@pytest.fixture
def event(db_session, host):
    """An open draft event owned by ``host``"""
    event = Event(
        title="Wine Trivia Night",
        description="Sip and answer",
        host_id=host.id,
        event_type="wine_tasting",
        difficulty="medium",
        status="draft",
        qr_code="JOIN1234",
        allow_participants=True,
        event_date=datetime(2030, 6, 1, 19, 0, tzinfo=timezone.utc)
    )
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event


@pytest.fixture
def make_openai_client():
    """Factory for fake OpenAI clients returning fixed content"""
    return fake_openai_client


@pytest.fixture
def make_questions_json():
    return generated_questions_json


@pytest.fixture
def unsplash_photos():
    return UNSPLASH_PHOTOS
