# notifier.py
# Оповещение подписчиков об изменении данных

import logging

log = logging.getLogger(__name__)


class ChangeNotifier:
    """
    Сигнал "данные изменились" без полезной нагрузки.

    Подписчики всегда перечитывают полный снимок сами. Порядок вызова
    подписчиков не гарантируется.
    """

    def __init__(self):
        self._handlers = []

    def subscribe(self, handler):
        self._handlers.append(handler)

        def unsubscribe():
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def publish(self):
        # Копия списка: подписчик может отписаться прямо во время рассылки
        for handler in list(self._handlers):
            try:
                handler()
            except Exception:
                log.exception(f'Подписчик {handler!r} упал при обработке изменения данных, пропускаем')

    @property
    def subscriber_count(self):
        return len(self._handlers)


class DataRefresher:
    """
    Подписчик, который перечитывает все данные при каждом изменении.

    Пока идет обновление, повторный вызов refresh() подавляется: все
    обновления сходятся к одному и тому же снимку.
    """

    def __init__(self, load, apply):
        self._load = load
        self._apply = apply
        self.in_progress = False

    def refresh(self):
        if self.in_progress:
            log.debug('Обновление данных уже идет, повторный вызов пропущен')
            return False

        self.in_progress = True
        try:
            self._apply(self._load())
        finally:
            self.in_progress = False
        return True

    def attach(self, notifier):
        return notifier.subscribe(self.refresh)
