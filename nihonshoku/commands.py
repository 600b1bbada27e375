import click
import random
from flask.cli import with_appcontext
from sqlalchemy import inspect, text
from nihonshoku.extensions import db
from nihonshoku.models import User, Restaurant, Article, ArticleRestaurant, Bookmark, Newsletter
from nihonshoku.services.article_service import dump_content
from nihonshoku.utils.fake_gen import fake, fake_uk


@click.command('status')
@with_appcontext
def status():
    """データベースの件数を表示する。"""
    click.echo(click.style('📊 データベースの状態:', fg='cyan', bold=True))

    try:
        counts = [
            ('ユーザー (Users)', User.query.count()),
            ('記事 (Articles)', Article.query.count()),
            ('公開記事 (Published)', Article.query.filter_by(published=True).count()),
            ('レストラン (Restaurants)', Restaurant.query.count()),
            ('公開レストラン (Published)',
             Restaurant.query.filter_by(status=Restaurant.STATUS_PUBLISHED).count()),
            ('ブックマーク (Bookmarks)', Bookmark.query.count()),
            ('ニュースレター (Newsletter)', Newsletter.query.count()),
        ]
        for label, count in counts:
            click.echo(f" - {label}: \t{count}")

        if counts[0][1] > 0:
            click.echo(click.style('✔ データベース接続は正常です。', fg='green'))
        else:
            click.echo(click.style('⚠ データベースが空です。flask forge でデモデータを作成してください。', fg='yellow'))

    except Exception as e:
        click.echo(click.style(f'✘ データベースの読み取りに失敗しました: {str(e)}', fg='red'))
        click.echo("'flask db upgrade' が実行済みか確認してください")


@click.command('forge')
@click.option('--scale', default=1, help='データ規模の倍率 (デフォルト 1)')
@click.option('--yes', is_flag=True, help='確認なしで実行する')
@with_appcontext
def forge(scale, yes):
    """
    デモデータを作成する（管理者・レストラン・記事・ブックマーク）。
    警告：既存のデータはすべて削除されます！
    """
    if not yes:
        click.confirm('既存のデータをすべて削除します。続行しますか？', abort=True)

    click.echo(click.style(f'⚡ デモデータを作成しています (規模: {scale}x)...', fg='cyan', bold=True))

    # 1. 清除旧数据
    db.drop_all()
    db.create_all()

    click.echo('ユーザーを作成しています...')
    users = init_users(scale)

    click.echo('レストランを登録しています...')
    restaurants = init_restaurants(scale)

    click.echo('記事を公開しています...')
    articles = init_articles(users[0], restaurants, scale)

    click.echo('ブックマークとニュースレターを作成しています...')
    init_engagement(users[1:], articles, scale)

    click.echo(click.style('✔ デモデータの作成が完了しました！', fg='green', bold=True))
    click.echo("管理者: admin / パスワード: admin123")
    click.echo(f"件数: {len(users)} ユーザー, {len(restaurants)} レストラン, {len(articles)} 記事")


def init_users(scale=1):
    """管理员 + 普通读者"""
    admin = User(username='admin', email='admin@nihonshoku.co.uk', password='admin123', is_admin=True)
    db.session.add(admin)
    users = [admin]

    for i in range(10 * scale):
        u = User(
            username=f"{fake_uk.user_name()}{i}",
            email=f"reader{i}@nihonshoku.co.uk",
            password='password',
        )
        db.session.add(u)
        users.append(u)

    db.session.commit()
    click.echo(f'  ✓ {len(users)} ユーザーを作成しました')
    return users


def init_restaurants(scale=1):
    """伦敦的日本料理店，大部分为已发布"""
    restaurants = []
    for _ in range(12 * scale):
        cuisine = random.choice(Restaurant.CUISINE_TYPES)
        latitude, longitude = fake.london_coordinates()
        r = Restaurant(
            name=fake.restaurant_name(cuisine),
            description=fake.paragraph(nb_sentences=3),
            address=fake_uk.address().replace('\n', ', '),
            latitude=latitude,
            longitude=longitude,
            cuisine_type=cuisine,
            price_range=random.choice(Restaurant.PRICE_RANGES),
            status=random.choice([Restaurant.STATUS_PUBLISHED] * 4 + [
                Restaurant.STATUS_DRAFT, Restaurant.STATUS_UNPUBLISHED]),
            website=fake_uk.url(),
            phone=fake_uk.phone_number(),
        )
        db.session.add(r)
        restaurants.append(r)

    db.session.commit()
    click.echo(f'  ✓ {len(restaurants)} レストランを登録しました')
    return restaurants


def init_articles(author, restaurants, scale=1):
    """评测（1 家店）、榜单（多家店）、随笔（不关联）"""
    articles = []
    published = [r for r in restaurants if r.status == Restaurant.STATUS_PUBLISHED] or restaurants

    for i in range(6 * scale):
        article_type = Article.TYPES[i % len(Article.TYPES)]
        title = fake.sentence(nb_words=4).rstrip('。')
        article = Article(
            title=title,
            slug=f"{article_type}-{i + 1}",
            content=dump_content(fake.tiptap_document(paragraphs=random.randint(2, 5), heading=title)),
            excerpt=fake.sentence(nb_words=10),
            cover_image=f"https://picsum.photos/seed/nihonshoku-{i}/1200/630",
            author_id=author.id,
            published=random.random() < 0.8,
            type=article_type,
        )
        db.session.add(article)
        db.session.flush()

        if article_type == Article.TYPE_REVIEW:
            picks = random.sample(published, k=1)
        elif article_type == Article.TYPE_LIST:
            picks = random.sample(published, k=min(len(published), random.randint(3, 5)))
        else:
            picks = []

        for order, restaurant in enumerate(picks):
            db.session.add(ArticleRestaurant(
                article_id=article.id,
                restaurant_id=restaurant.id,
                order=order,
                description=fake.sentence(nb_words=8),
            ))
        articles.append(article)

    db.session.commit()
    click.echo(f'  ✓ {len(articles)} 記事を作成しました')
    return articles


def init_engagement(readers, articles, scale=1):
    """读者收藏与新闻通讯订阅"""
    visible = [a for a in articles if a.published] or articles
    for reader in readers:
        for article in random.sample(visible, k=min(len(visible), random.randint(0, 3))):
            db.session.add(Bookmark(user_id=reader.id, article_id=article.id))

    emails = {fake_uk.unique.email() for _ in range(15 * scale)}
    for email in emails:
        db.session.add(Newsletter(email=email, confirmed=random.random() < 0.5))
    db.session.commit()


@click.command('create-admin')
@click.option('--username', prompt='ユーザー名', help='管理者のユーザー名')
@click.option('--email', prompt='メールアドレス', help='管理者のメールアドレス')
@click.option('--password', prompt='パスワード', hide_input=True, confirmation_prompt=True,
              help='管理者のパスワード')
@with_appcontext
def create_admin(username, email, password):
    """管理者を作成する。既存ユーザーの場合は管理者に昇格してパスワードを更新する。"""
    user = User.query.filter_by(username=username).first()
    if user:
        user.is_admin = True
        user.password = password
        action = '昇格'
    else:
        if User.query.filter_by(email=email).first():
            raise click.ClickException('このメールアドレスは既に登録されています')
        user = User(username=username, email=email, password=password, is_admin=True)
        db.session.add(user)
        action = '作成'
    db.session.commit()
    click.echo(click.style(f'✔ 管理者 {username} を{action}しました', fg='green'))


# 旧版本创建的 restaurants 表缺少的列
# 格式: (列名, 类型, 默认值)
RESTAURANT_COLUMNS = [
    ('cuisine_type', 'VARCHAR(16)', "'washoku'"),
    ('price_range', 'VARCHAR(16)', "'moderate'"),
    ('status', 'VARCHAR(16)', "'published'"),  # 旧数据此前全部对外可见
]


@click.command('fix-schema')
@with_appcontext
def fix_schema():
    """旧データベースに不足しているレストランの列を追加する（何度実行しても安全）"""
    inspector = inspect(db.engine)
    if 'restaurants' not in inspector.get_table_names():
        click.echo(click.style('restaurants テーブルがありません。flask db upgrade を先に実行してください。', fg='yellow'))
        return

    existing = {column['name'] for column in inspector.get_columns('restaurants')}
    for name, col_type, default in RESTAURANT_COLUMNS:
        if name in existing:
            click.echo(f"ℹ️  列は既に存在します: {name}")
            continue
        db.session.execute(text(
            f"ALTER TABLE restaurants ADD COLUMN {name} {col_type} NOT NULL DEFAULT {default}"
        ))
        db.session.commit()
        click.echo(click.style(f"✅ 列を追加しました: {name}", fg='green'))

    click.echo('🎉 スキーマの修正が完了しました')
