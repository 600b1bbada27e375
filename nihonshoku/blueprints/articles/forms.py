from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, BooleanField
from wtforms.validators import DataRequired, Length
from nihonshoku.models import Article
from nihonshoku.utils.forms import JSONField, strip
from nihonshoku.utils.validators import validate_slug, validate_json_document


class ArticleForm(FlaskForm):
    """文章表单（字段名与前端提交的 JSON 键一致）"""
    title = StringField('タイトル', filters=[strip], validators=[
        DataRequired(message='タイトルを入力してください'), Length(max=255)
    ])
    slug = StringField('スラッグ', filters=[strip], validators=[
        DataRequired(message='スラッグを入力してください'), Length(max=255), validate_slug
    ])
    # TipTap 生成的 JSON 文档
    content = JSONField('本文', validators=[validate_json_document])
    excerpt = TextAreaField('概要', filters=[strip], validators=[
        DataRequired(message='概要を入力してください')
    ])
    coverImage = StringField('カバー画像', validators=[
        DataRequired(message='カバー画像を指定してください')
    ])
    type = SelectField('記事タイプ', choices=[
        (Article.TYPE_REVIEW, 'レビュー (Review)'),
        (Article.TYPE_LIST, 'リスト (List)'),
        (Article.TYPE_ESSAY, 'エッセイ (Essay)'),
    ], default=Article.TYPE_REVIEW)
    published = BooleanField('公開', default=False)
