# repository.py
# CRUD для проектов, судей, критериев и оценок поверх снимка

import itertools
import logging
import time
from dataclasses import replace

from errors import NotFoundError, UnauthorizedTrackError, ValidationError
from models import Criterion, Judge, Project, Score, Snapshot, score_id_for
from models.constants import utc_now
from notifier import ChangeNotifier
from storage import SnapshotCache, SnapshotStore
from validation import (
    CRITERION_FIELDS, JUDGE_FIELDS, PROJECT_FIELDS, check_fields, clean_criterion,
    clean_judge, clean_project, optional_text, validate_rating,
)

log = logging.getLogger(__name__)

# Комментарий не передан: при повторной оценке остается прежний
KEEP_COMMENT = object()


class IdFactory:
    """Идентификаторы вида <префикс>_<время в мс>_<порядковый номер>."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._sequence = itertools.count(1)

    def mint(self, prefix, taken=()):
        while True:
            record_id = f'{prefix}_{int(self._clock() * 1000)}_{next(self._sequence)}'
            if record_id not in taken:
                return record_id


class EvaluationStore:
    """
    Точка входа для всех операций с данными.

    Каждая мутация читает снимок через кэш, строит новый снимок целиком,
    сохраняет его, обновляет кэш этим же объектом и только затем
    оповещает подписчиков.
    """

    def __init__(self, store, cache=None, notifier=None, id_factory=None):
        self.store = store
        self.cache = cache or SnapshotCache(store)
        self.notifier = notifier or ChangeNotifier()
        self.ids = id_factory or IdFactory()

        self.projects = ProjectRepository(self)
        self.judges = JudgeRepository(self)
        self.criteria = CriterionRepository(self)
        self.scores = ScoreRepository(self)

    @classmethod
    def from_config(cls, config):
        store = SnapshotStore(config['JUDGING_SNAPSHOT_KEY'])
        cache = SnapshotCache(store, ttl_seconds=config['JUDGING_CACHE_TTL'])
        return cls(store, cache=cache)

    def get_all_data(self):
        return self.cache.get()

    def commit(self, snapshot, message):
        # Сбой записи не прерывает сессию: кэш держит новое состояние до
        # конца окна свежести, подписчики оповещаются как обычно.
        if not self.store.save(snapshot):
            message = f'{message} (не сохранено в базе)'
        self.cache.invalidate(snapshot)
        log.info(message)
        self.notifier.publish()
        return snapshot

    def reset(self):
        self.commit(Snapshot.empty(), 'Все данные платформы очищены')


class _CollectionRepository:
    collection = None
    entity = None

    def __init__(self, owner):
        self._owner = owner

    def _snapshot(self):
        return self._owner.get_all_data()

    def _records(self, snapshot=None):
        return getattr(snapshot or self._snapshot(), self.collection)

    def find(self, snapshot, record_id):
        for record in getattr(snapshot, self.collection):
            if record.id == record_id:
                return record
        raise NotFoundError(self.entity, record_id)

    def get(self, record_id):
        return self.find(self._snapshot(), record_id)

    def count(self):
        return len(self._records())

    def delete(self, record_id):
        snapshot = self._snapshot()
        record = self.find(snapshot, record_id)
        changes = {self.collection: [r for r in self._records(snapshot) if r.id != record_id]}
        changes.update(self._cascade(snapshot, record_id))
        self._owner.commit(snapshot.with_changes(**changes), f'{self.entity} "{record_id}" удален(а)')
        return record

    def _cascade(self, snapshot, record_id):
        return {}


class _EditableRepository(_CollectionRepository):
    record_type = None
    id_prefix = None
    fields = ()

    def create(self, **fields):
        snapshot = self._snapshot()
        record = self._build(snapshot, fields, taken=set())
        records = self._records(snapshot) + (record,)
        self._owner.commit(
            snapshot.with_changes(**{self.collection: records}),
            f'{self.entity} "{record.name}" создан(а) ({record.id})',
        )
        return record

    def update(self, record_id, **patch):
        snapshot = self._snapshot()
        current = self.find(snapshot, record_id)
        if not patch:
            raise ValidationError('Нет полей для обновления.')
        check_fields(patch, self.fields, self.entity)

        merged = {field: getattr(current, field) for field in self.fields}
        merged.update(patch)
        cleaned = self._clean(merged, snapshot, current)
        updated = replace(current, **cleaned, **self._timestamps(created=False))

        records = [updated if r.id == record_id else r for r in self._records(snapshot)]
        self._owner.commit(
            snapshot.with_changes(**{self.collection: records}),
            f'{self.entity} "{updated.name}" обновлен(а) ({record_id})',
        )
        return updated

    def _build(self, snapshot, fields, taken):
        cleaned = self._clean(fields, snapshot, None)
        taken = taken | {r.id for r in self._records(snapshot)}
        return self.record_type(
            id=self._owner.ids.mint(self.id_prefix, taken),
            **cleaned,
            **self._timestamps(created=True),
        )

    def _clean(self, data, snapshot, current):
        raise NotImplementedError

    def _timestamps(self, created):
        return {'created_at': utc_now()} if created else {}


class ProjectRepository(_EditableRepository):
    collection = 'projects'
    entity = 'Проект'
    record_type = Project
    id_prefix = 'p'
    fields = PROJECT_FIELDS

    def list(self, track=None, status=None, search=None, newest_first=False):
        needle = search.strip().lower() if search else None
        result = []
        for project in self._records():
            if track and project.track != track:
                continue
            if status and project.status != status:
                continue
            if needle and needle not in project.name.lower() and needle not in project.team_name.lower():
                continue
            result.append(project)
        if newest_first:
            result.sort(key=lambda p: p.created_at or '', reverse=True)
        return result

    def create_many(self, items):
        """Импорт списка проектов одной записью: либо все, либо ни одного."""
        snapshot = self._snapshot()
        created = []
        taken = set()
        for fields in items:
            project = self._build(snapshot, dict(fields), taken)
            taken.add(project.id)
            created.append(project)
        if not created:
            return []

        self._owner.commit(
            snapshot.with_changes(projects=snapshot.projects + tuple(created)),
            f'Импортировано проектов: {len(created)}',
        )
        return created

    def _clean(self, data, snapshot, current):
        return clean_project(data)

    def _timestamps(self, created):
        now = utc_now()
        if created:
            return {'created_at': now, 'updated_at': now}
        return {'updated_at': now}

    def _cascade(self, snapshot, record_id):
        # Вместе с проектом удаляются все его оценки
        return {'scores': [s for s in snapshot.scores if s.project_id != record_id]}


class JudgeRepository(_EditableRepository):
    collection = 'judges'
    entity = 'Судья'
    record_type = Judge
    id_prefix = 'j'
    fields = JUDGE_FIELDS

    def list(self, track=None, search=None, is_active=None):
        needle = search.strip().lower() if search else None
        result = []
        for judge in self._records():
            if track and track not in judge.tracks:
                continue
            if is_active is not None and judge.is_active != is_active:
                continue
            if needle and needle not in judge.name.lower() and needle not in judge.email.lower():
                continue
            result.append(judge)
        return result

    def find_by_email(self, email):
        email = email.strip().lower()
        for judge in self._records():
            if judge.email.lower() == email:
                return judge
        return None

    def _clean(self, data, snapshot, current):
        cleaned = clean_judge(data)
        email = cleaned['email'].lower()
        for judge in snapshot.judges:
            if current and judge.id == current.id:
                continue
            if judge.email.lower() == email:
                raise ValidationError(f'Судья с email {cleaned["email"]} уже существует.', field='email')
        return cleaned

    def _cascade(self, snapshot, record_id):
        # Вместе с судьей удаляются все выставленные им оценки
        return {'scores': [s for s in snapshot.scores if s.judge_id != record_id]}


class CriterionRepository(_EditableRepository):
    collection = 'criteria'
    entity = 'Критерий'
    record_type = Criterion
    id_prefix = 'c'
    fields = CRITERION_FIELDS

    def list(self, track=None):
        return [c for c in self._records() if track is None or c.applies_to(track)]

    def _clean(self, data, snapshot, current):
        return clean_criterion(data)

    # Оценки по удаленному критерию остаются в хранилище и просто
    # не учитываются при подсчете (история оценок сохраняется).


class ScoreRepository(_CollectionRepository):
    collection = 'scores'
    entity = 'Оценка'

    def list(self, project_id=None, judge_id=None, criterion_id=None):
        return [
            s for s in self._records()
            if (project_id is None or s.project_id == project_id)
            and (judge_id is None or s.judge_id == judge_id)
            and (criterion_id is None or s.criterion_id == criterion_id)
        ]

    def find_by_key(self, project_id, judge_id, criterion_id):
        for score in self._records():
            if score.key == (project_id, judge_id, criterion_id):
                return score
        return None

    def upsert(self, project_id, judge_id, criterion_id, value, comment=KEEP_COMMENT):
        """
        Выставляет оценку судьи проекту по критерию.

        Если оценка по этой тройке уже есть, ее значение заменяется на месте
        (тот же id), иначе добавляется новая запись. Без comment прежний
        комментарий сохраняется, comment=None или пустая строка его стирает.
        """
        snapshot = self._snapshot()
        score, scores = self._apply(snapshot, list(snapshot.scores), project_id, judge_id, criterion_id, value, comment)
        self._owner.commit(
            snapshot.with_changes(scores=scores),
            f'Оценка {score.value} сохранена: проект {project_id}, судья {judge_id}, критерий {criterion_id}',
        )
        return score

    def submit_many(self, project_id, judge_id, ratings, comments=None):
        """
        Сохраняет оценки одного судьи одному проекту сразу по нескольким
        критериям ({criterion_id: value}). Либо все, либо ни одной.
        """
        if not ratings:
            raise ValidationError('Необходимо выставить хотя бы одну оценку.', field='ratings')
        comments = comments or {}

        snapshot = self._snapshot()
        scores = list(snapshot.scores)
        saved = []
        for criterion_id, value in ratings.items():
            score, scores = self._apply(
                snapshot, scores, project_id, judge_id, criterion_id, value, comments.get(criterion_id, KEEP_COMMENT)
            )
            saved.append(score)

        self._owner.commit(
            snapshot.with_changes(scores=scores),
            f'Судья {judge_id} сохранил(а) {len(saved)} оценок проекту {project_id}',
        )
        return saved

    def _apply(self, snapshot, scores, project_id, judge_id, criterion_id, value, comment):
        project = self._owner.projects.find(snapshot, project_id)
        judge = self._owner.judges.find(snapshot, judge_id)
        criterion = self._owner.criteria.find(snapshot, criterion_id)

        if not judge.can_score(project.track):
            raise UnauthorizedTrackError(judge.id, project.track)
        validate_rating(value)
        if not criterion.applies_to(project.track):
            raise ValidationError(
                f'Критерий "{criterion.name}" не применяется к треку "{project.track}".',
                field='criterion_id',
            )
        keep_comment = comment is KEEP_COMMENT
        comment = None if keep_comment else optional_text(comment, 'comment')

        now = utc_now()
        key = (project_id, judge_id, criterion_id)
        for index, existing in enumerate(scores):
            if existing.key == key:
                updated = replace(
                    existing,
                    value=value,
                    comment=existing.comment if keep_comment else comment,
                    updated_at=now,
                )
                scores[index] = updated
                return updated, scores

        created = Score(
            id=score_id_for(project_id, judge_id, criterion_id),
            project_id=project_id,
            judge_id=judge_id,
            criterion_id=criterion_id,
            value=value,
            comment=comment,
            created_at=now,
            updated_at=now,
        )
        scores.append(created)
        return created, scores
