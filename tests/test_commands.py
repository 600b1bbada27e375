"""Flask CLI commands: forge, status, create-admin and fix-schema."""

from sqlalchemy import inspect, text

from conftest import make_user

from nihonshoku.extensions import db
from nihonshoku.models import Article, ArticleRestaurant, Restaurant, User


def test_forge_creates_demo_data(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["forge", "--yes"])
    assert result.exit_code == 0, result.output

    with app.app_context():
        assert User.query.count() == 11
        assert User.query.filter_by(is_admin=True).count() == 1
        assert Restaurant.query.count() == 12
        assert Article.query.count() == 6

        admin = User.query.filter_by(username="admin").first()
        assert admin.verify_password("admin123")

        for article in Article.query.all():
            links = ArticleRestaurant.query.filter_by(article_id=article.id).count()
            if article.type == Article.TYPE_REVIEW:
                assert links == 1
            elif article.type == Article.TYPE_ESSAY:
                assert links == 0
            assert isinstance(article.parsed_content(), dict)


def test_forge_asks_for_confirmation(app):
    make_user(app, "keeper")
    result = app.test_cli_runner().invoke(args=["forge"], input="n\n")
    assert result.exit_code != 0
    with app.app_context():
        assert User.query.filter_by(username="keeper").count() == 1


def test_status(app):
    make_user(app, "reader")
    result = app.test_cli_runner().invoke(args=["status"])
    assert result.exit_code == 0
    assert "Users" in result.output


def test_create_admin(app):
    result = app.test_cli_runner().invoke(args=[
        "create-admin", "--username", "chef", "--email", "chef@nihonshoku.co.uk", "--password", "omakase99",
    ])
    assert result.exit_code == 0, result.output

    with app.app_context():
        user = User.query.filter_by(username="chef").first()
        assert user.is_admin
        assert user.verify_password("omakase99")


def test_create_admin_promotes_existing_user(app):
    make_user(app, "reader")
    result = app.test_cli_runner().invoke(args=[
        "create-admin", "--username", "reader", "--email", "reader@nihonshoku.co.uk", "--password", "newpass99",
    ])
    assert result.exit_code == 0, result.output

    with app.app_context():
        assert User.query.count() == 1
        user = User.query.filter_by(username="reader").first()
        assert user.is_admin
        assert user.verify_password("newpass99")


def _create_legacy_restaurants_table():
    db.drop_all()
    db.session.execute(text(
        "CREATE TABLE restaurants ("
        "id INTEGER PRIMARY KEY, name TEXT NOT NULL, description TEXT NOT NULL, "
        "address TEXT NOT NULL, latitude TEXT NOT NULL, longitude TEXT NOT NULL, "
        "website TEXT, phone TEXT, created_at DATETIME NOT NULL)"
    ))
    db.session.execute(text(
        "INSERT INTO restaurants (name, description, address, latitude, longitude, created_at) "
        "VALUES ('鮨 さくら', 'Omakase', 'Soho', '51.51', '-0.13', '2024-01-01 12:00:00')"
    ))
    db.session.commit()


def test_fix_schema_adds_missing_columns(app):
    with app.app_context():
        _create_legacy_restaurants_table()

    runner = app.test_cli_runner()
    result = runner.invoke(args=["fix-schema"])
    assert result.exit_code == 0, result.output

    with app.app_context():
        columns = {c["name"] for c in inspect(db.engine).get_columns("restaurants")}
        assert {"cuisine_type", "price_range", "status"} <= columns
        row = db.session.execute(text(
            "SELECT cuisine_type, price_range, status FROM restaurants"
        )).one()
        assert tuple(row) == ("washoku", "moderate", "published")

    # Running again changes nothing
    again = runner.invoke(args=["fix-schema"])
    assert again.exit_code == 0, again.output
    assert "列は既に存在します" in again.output
