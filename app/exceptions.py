class AppException(Exception):
    """
    Базовый класс для всех исключений приложения.
    """
    pass


class NotFoundError(AppException):
    """
    Ресурс не найден (например, здание с таким slug отсутствует на бэкенде).
    """
    pass


class ServiceError(AppException):
    """
    Ошибка на уровне бизнес-логики (сервисов).
    """
    pass


class UpstreamError(ServiceError):
    """
    Навигационный бэкенд недоступен или ответил ошибкой.
    status_code — HTTP-статус ответа, если ответ вообще был.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
