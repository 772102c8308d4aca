# models/snapshot.py
# Снимок всех четырех коллекций и его (де)сериализация

from dataclasses import dataclass, replace
from typing import Tuple

from errors import StorageError
from .project import Project
from .judge import Judge
from .criterion import Criterion
from .score import Score

COLLECTION_KEYS = ('projects', 'judges', 'criteria', 'scores')

_RECORD_TYPES = {
    'projects': Project,
    'judges': Judge,
    'criteria': Criterion,
    'scores': Score,
}


@dataclass(frozen=True)
class Snapshot:
    """
    Полное состояние платформы на момент времени.

    Снимок неизменяем: записи - frozen dataclass, коллекции - кортежи.
    Любая мутация строит новый снимок через with_changes().
    """

    projects: Tuple[Project, ...] = ()
    judges: Tuple[Judge, ...] = ()
    criteria: Tuple[Criterion, ...] = ()
    scores: Tuple[Score, ...] = ()

    @classmethod
    def empty(cls):
        return cls()

    def with_changes(self, **collections):
        return replace(self, **{key: tuple(value) for key, value in collections.items()})

    def projects_by_id(self):
        return {p.id: p for p in self.projects}

    def judges_by_id(self):
        return {j.id: j for j in self.judges}

    def criteria_by_id(self):
        return {c.id: c for c in self.criteria}

    def to_document(self):
        return {key: [record.to_document() for record in getattr(self, key)] for key in COLLECTION_KEYS}

    @classmethod
    def from_document(cls, doc):
        """
        Разбирает сохраненный документ. Отсутствие или порча любого из
        четырех ключей считается повреждением всего снимка (StorageError).
        """
        if not isinstance(doc, dict):
            raise StorageError('Снимок должен быть JSON-объектом.')

        collections = {}
        for key in COLLECTION_KEYS:
            items = doc.get(key)
            if not isinstance(items, list):
                raise StorageError(f'Ключ "{key}" отсутствует или не является списком.')
            record_type = _RECORD_TYPES[key]
            try:
                collections[key] = tuple(record_type.from_document(item) for item in items)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise StorageError(f'Поврежденная запись в "{key}": {e}') from e
        return cls(**collections)
