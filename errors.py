# errors.py
# Иерархия ошибок хранилища оценок.
# Сообщения пригодны для прямого показа пользователю (как flash в админке).


class JudgingError(Exception):
    """Базовая ошибка платформы судейства."""


class ValidationError(JudgingError):
    """Входные данные отсутствуют или имеют неверный формат."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class NotFoundError(JudgingError):
    def __init__(self, entity, record_id):
        super().__init__(f'{entity} с id "{record_id}" не найден(а).')
        self.entity = entity
        self.record_id = record_id


class UnauthorizedTrackError(JudgingError):
    """Судья пытается оценить проект вне своих треков."""

    def __init__(self, judge_id, track):
        super().__init__(f'Судья "{judge_id}" не назначен на трек "{track}".')
        self.judge_id = judge_id
        self.track = track


class InvalidRatingError(JudgingError):
    def __init__(self, value):
        super().__init__(f'Оценка должна быть числом от 1 до 10, получено: {value!r}.')
        self.value = value


class StorageError(JudgingError):
    """Хранилище недоступно или содержимое повреждено."""
