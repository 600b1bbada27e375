class NihonshokuException(Exception):
    """系统基础异常类，由全局错误处理器渲染为 JSON"""
    error = None

    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        if self.error:
            rv['error'] = self.error
        return rv


class ValidationError(NihonshokuException):
    """请求数据验证错误"""
    error = 'VALIDATION_ERROR'

    def __init__(self, message="入力内容が正しくありません", payload=None):
        super().__init__(message, code=400, payload=payload)

    @classmethod
    def from_form(cls, form):
        """把 WTForms 的字段错误整理成一个异常"""
        errors = {name: list(messages) for name, messages in form.errors.items()}
        first = next(iter(errors.values()), [None])[0]
        return cls(first or "入力内容が正しくありません", payload={'errors': errors})


class DuplicateSlugError(ValidationError):
    """文章 slug 重复"""
    error = 'DUPLICATE_SLUG'

    def __init__(self, slug=None):
        super().__init__("このスラッグは既に使用されています", payload={'slug': slug} if slug else None)


class AlreadySubscribedError(ValidationError):
    """邮箱已订阅"""
    error = 'ALREADY_SUBSCRIBED'

    def __init__(self):
        super().__init__("このメールアドレスは既に登録されています")


class Unauthorized(NihonshokuException):
    """未登录"""
    def __init__(self, message="ログインが必要です", payload=None):
        super().__init__(message, code=401, payload=payload)


class PermissionDenied(NihonshokuException):
    """权限不足"""
    def __init__(self, message="管理者権限がありません", payload=None):
        super().__init__(message, code=403, payload=payload)


class NotFound(NihonshokuException):
    """资源不存在"""
    def __init__(self, message="見つかりません", payload=None):
        super().__init__(message, code=404, payload=payload)
