"""Shared fixtures: in-memory app, users and logged-in clients."""

import pytest

from nihonshoku import create_app, db
from nihonshoku.models import Article, Restaurant, User


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, username, password="password123", is_admin=False):
    with app.app_context():
        user = User(
            username=username,
            email=f"{username}@nihonshoku.co.uk",
            password=password,
            is_admin=is_admin,
        )
        db.session.add(user)
        db.session.commit()
        return user.id


def login(app, username, password="password123"):
    client = app.test_client()
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def admin_id(app):
    return make_user(app, "editor", is_admin=True)


@pytest.fixture
def admin_client(app, admin_id):
    return login(app, "editor")


@pytest.fixture
def user_id(app):
    return make_user(app, "reader")


@pytest.fixture
def user_client(app, user_id):
    return login(app, "reader")


def make_restaurant(app, name="鮨 さくら", status=Restaurant.STATUS_PUBLISHED, **overrides):
    with app.app_context():
        restaurant = Restaurant(
            name=name,
            description="Omakase counter in Soho",
            address="12 Greek Street, London W1D 4DL",
            latitude="51.514000",
            longitude="-0.131600",
            cuisine_type=overrides.pop("cuisine_type", "sushi"),
            price_range=overrides.pop("price_range", "expensive"),
            status=status,
            **overrides,
        )
        db.session.add(restaurant)
        db.session.commit()
        return restaurant.id


def make_article(app, author_id, slug="ramen-guide", published=True, article_type="essay"):
    with app.app_context():
        article = Article(
            title="London ramen guide",
            slug=slug,
            content='{"type": "doc", "content": []}',
            excerpt="Where to slurp in London",
            cover_image="https://images.example.org/ramen.jpg",
            author_id=author_id,
            published=published,
            type=article_type,
        )
        db.session.add(article)
        db.session.commit()
        return article.id


def article_payload(**overrides):
    payload = {
        "title": "鮨 さくら: omakase review",
        "slug": "sushi-sakura-review",
        "content": {
            "type": "doc",
            "content": [
                {
                    "type": "heading",
                    "attrs": {"level": 2},
                    "content": [{"type": "text", "text": "カウンター席"}],
                },
                {
                    "type": "paragraph",
                    "content": [{"type": "text", "text": "Twelve courses of Edomae sushi."}],
                },
                {"type": "image", "attrs": {"src": "data:image/png;base64,iVBORw0KGgo=", "alt": None}},
            ],
        },
        "excerpt": "A quiet omakase counter in Soho",
        "coverImage": "https://images.example.org/sakura.jpg",
        "type": "review",
        "published": True,
    }
    payload.update(overrides)
    return payload
