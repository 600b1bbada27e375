"""Bookmarks belong to the logged-in user."""

from conftest import login, make_article, make_user

from nihonshoku.models import Bookmark


def test_bookmarks_require_login(app, client, admin_id):
    article_id = make_article(app, admin_id)
    assert client.get("/api/bookmarks").status_code == 401
    assert client.post("/api/bookmarks", json={"articleId": article_id}).status_code == 401
    assert client.delete(f"/api/bookmarks/{article_id}").status_code == 401


def test_add_bookmark_is_idempotent(app, user_client, admin_id):
    article_id = make_article(app, admin_id)

    first = user_client.post("/api/bookmarks", json={"articleId": article_id})
    assert first.status_code == 201
    assert first.get_json()["article"]["slug"] == "ramen-guide"

    again = user_client.post("/api/bookmarks", json={"articleId": article_id})
    assert again.status_code == 200
    assert again.get_json()["id"] == first.get_json()["id"]

    with app.app_context():
        assert Bookmark.query.count() == 1


def test_list_bookmarks_only_shows_own(app, user_client, admin_id):
    mine = make_article(app, admin_id, slug="mine")
    theirs = make_article(app, admin_id, slug="theirs")
    make_user(app, "someone")
    other = login(app, "someone")
    other.post("/api/bookmarks", json={"articleId": theirs})

    user_client.post("/api/bookmarks", json={"articleId": mine})
    bookmarks = user_client.get("/api/bookmarks").get_json()
    assert [b["articleId"] for b in bookmarks] == [mine]
    assert "restaurants" not in bookmarks[0]["article"]


def test_remove_bookmark(app, user_client, admin_id):
    article_id = make_article(app, admin_id)
    user_client.post("/api/bookmarks", json={"articleId": article_id})

    resp = user_client.delete(f"/api/bookmarks/{article_id}")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "deleted": 1}
    assert user_client.get("/api/bookmarks").get_json() == []


def test_remove_missing_bookmark_succeeds(user_client):
    resp = user_client.delete("/api/bookmarks/12345")
    assert resp.status_code == 200
    assert resp.get_json()["deleted"] == 0


def test_bookmark_unknown_article(app, user_client):
    resp = user_client.post("/api/bookmarks", json={"articleId": 999})
    assert resp.status_code == 400
    with app.app_context():
        assert Bookmark.query.count() == 0


def test_bookmark_requires_article_id(user_client):
    assert user_client.post("/api/bookmarks", json={}).status_code == 400
    assert user_client.post("/api/bookmarks", json={"articleId": "abc"}).status_code == 400


def test_same_article_bookmarked_by_two_users(app, user_client, admin_client, admin_id):
    article_id = make_article(app, admin_id)

    assert user_client.post("/api/bookmarks", json={"articleId": article_id}).status_code == 201
    assert admin_client.post("/api/bookmarks", json={"articleId": article_id}).status_code == 201
    # Repeat hits the unique constraint and returns the stored row
    repeat = user_client.post("/api/bookmarks", json={"articleId": article_id})
    assert repeat.status_code == 200
    assert repeat.get_json()["articleId"] == article_id

    with app.app_context():
        assert Bookmark.query.count() == 2
