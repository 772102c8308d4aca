# storage.py
# Постоянное хранилище снимка и кэш чтения поверх него

import json
import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from errors import StorageError
from extensions import db
from models import Snapshot, SnapshotRecord

log = logging.getLogger(__name__)


class SnapshotStore:
    """
    Хранит весь снимок одной строкой таблицы snapshots.

    load() никогда не роняет вызывающего: пустая или поврежденная строка
    логируется и превращается в пустой снимок. save() заменяет документ
    целиком в одной транзакции и тоже не бросает исключений.
    """

    def __init__(self, key):
        self.key = key

    def load(self):
        try:
            record = db.session.get(SnapshotRecord, self.key)
        except SQLAlchemyError as e:
            db.session.rollback()
            log.error(f'Не удалось прочитать снимок "{self.key}", начинаем с пустого: {e}')
            return Snapshot.empty()

        if record is None:
            return Snapshot.empty()

        try:
            return Snapshot.from_document(json.loads(record.payload))
        except (ValueError, StorageError) as e:
            log.warning(f'Снимок "{self.key}" поврежден, начинаем с пустого: {e}')
            return Snapshot.empty()

    def save(self, snapshot):
        """
        Заменяет документ целиком. Ошибка базы не пробрасывается: она
        логируется, транзакция откатывается, и возвращается False.
        """
        payload = json.dumps(snapshot.to_document(), ensure_ascii=False)
        try:
            record = db.session.get(SnapshotRecord, self.key)
            if record:
                record.payload = payload
            else:
                db.session.add(SnapshotRecord(key=self.key, payload=payload))
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            log.error(f'Не удалось сохранить снимок "{self.key}": {e}')
            return False

        log.debug(
            f'Снимок "{self.key}" сохранен: {len(snapshot.projects)} проектов, '
            f'{len(snapshot.judges)} судей, {len(snapshot.criteria)} критериев, {len(snapshot.scores)} оценок'
        )
        return True

    def clear(self):
        return self.save(Snapshot.empty())


class SnapshotCache:
    """
    Кэш последнего прочитанного снимка с окном свежести ttl_seconds.

    После каждой записи вызывается invalidate(snapshot), чтобы
    чтение сразу после записи видело новое состояние, не дожидаясь окна.
    """

    def __init__(self, store, ttl_seconds=60.0, clock=time.monotonic):
        self.store = store
        self.ttl_seconds = max(0.0, float(ttl_seconds))
        self._clock = clock
        self._snapshot = None
        self._loaded_at = None

    def get(self):
        if self._is_fresh():
            return self._snapshot
        snapshot = self.store.load()
        self._remember(snapshot)
        return snapshot

    def invalidate(self, snapshot):
        self._remember(snapshot)

    def clear(self):
        self._snapshot = None
        self._loaded_at = None

    def _remember(self, snapshot):
        self._snapshot = snapshot
        self._loaded_at = self._clock()

    def _is_fresh(self):
        if self._snapshot is None:
            return False
        return self._clock() - self._loaded_at < self.ttl_seconds
