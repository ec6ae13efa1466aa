import os

# Settings are read once and cached, so the test database must be chosen
# before anything under app/ is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["SUGGESTION_CACHE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401  register all tables on Base.metadata
from app.database import Base, SessionLocal, engine
from app.main import app as api
from app.models.store import Store


SAMPLE_COMPLETION = """Here are 6 food items that suit a vegetarian diet:

1. **Lentils**
   - Category: Protein
   - Nutrition per 100g:
     - Calories: 116 kcal
     - Protein: 9g
     - Carbohydrates: 20g
     - Fat: 0.4g

2. **Quinoa**
   - Category: Grains
   - Nutrition per 100g:
     - Calories: 120 kcal
     - Protein: 4.4g
     - Carbohydrates: 21.3g
     - Fat: 1.9g

3. **Peanut Butter**
   - Category: Spreads
   - Nutrition per 100g:
     - Calories: 588 kcal
     - Protein: 25g
     - Carbohydrates: 20g
     - Fat: 50g

Enjoy planning your meals!"""


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Stands in for GroceryAI; counts upstream calls."""

    enabled = True

    def __init__(self, items=None):
        self.items = list(items or [])
        self.calls = 0

    async def suggest(self, preferences):
        self.calls += 1
        return list(self.items)


@pytest.fixture
def completion_text():
    return SAMPLE_COMPLETION


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(api) as c:
        yield c
    api.dependency_overrides.clear()


def register(client, email="shopper@example.com", password="secret123"):
    resp = client.post("/api/v1/auth/register", json={
        "email": email, "password": password, "name": "Shopper",
    })
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


@pytest.fixture
def seeded_stores(db):
    for name in ["Whole Foods", "Trader Joe's", "Safeway"]:
        db.add(Store(name=name))
    db.commit()
