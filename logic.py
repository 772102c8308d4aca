# logic.py
# Назначение проектов судьям, подсчет средних баллов и рейтинги.
# Все функции чистые: работают над переданным снимком и ничего не хранят.

import statistics
from dataclasses import dataclass
from typing import Optional, Tuple

from errors import ValidationError
from models import Project
from models.constants import PROJECT_STATUSES, TRACKS

# Точность сравнения средних при сортировке и определении ничьих
_TIE_PRECISION = 9


@dataclass(frozen=True)
class JudgeEvaluation:
    judge_id: str
    weighted_mean: float
    criteria_count: int


@dataclass(frozen=True)
class ProjectResult:
    project: Project
    average: Optional[float]
    evaluation_count: int
    judge_evaluations: Tuple[JudgeEvaluation, ...] = ()


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    project: Project
    average: float
    evaluation_count: int


def assigned_projects(judge, projects):
    """Проекты, чей трек входит в треки судьи (порядок сохраняется)."""
    return [p for p in projects if p.track in judge.tracks]


def _judge_evaluations(scores, criteria_by_id):
    # judge_id -> [сумма value*weight, сумма весов, число критериев]
    totals = {}
    for score in scores:
        criterion = criteria_by_id.get(score.criterion_id)
        if criterion is None:
            # Критерий удален: оценка хранится, но не учитывается
            continue
        total = totals.setdefault(score.judge_id, [0.0, 0.0, 0])
        total[0] += score.value * criterion.weight
        total[1] += criterion.weight
        total[2] += 1

    return tuple(
        JudgeEvaluation(judge_id=judge_id, weighted_mean=weighted / weight_sum, criteria_count=count)
        for judge_id, (weighted, weight_sum, count) in totals.items()
    )


def _build_result(project, scores, criteria_by_id):
    evaluations = _judge_evaluations(scores, criteria_by_id)
    if not evaluations:
        return ProjectResult(project=project, average=None, evaluation_count=0)
    average = sum(e.weighted_mean for e in evaluations) / len(evaluations)
    return ProjectResult(
        project=project,
        average=average,
        evaluation_count=len(evaluations),
        judge_evaluations=evaluations,
    )


def project_results(snapshot):
    """Результаты всех проектов снимка в порядке добавления проектов."""
    criteria_by_id = snapshot.criteria_by_id()
    scores_by_project = {}
    for score in snapshot.scores:
        scores_by_project.setdefault(score.project_id, []).append(score)
    return [
        _build_result(project, scores_by_project.get(project.id, []), criteria_by_id)
        for project in snapshot.projects
    ]


def project_result(project, snapshot):
    """
    Средний балл проекта.

    Для каждого судьи считается взвешенное среднее только по выставленным им
    критериям (пропущенный критерий не считается нулем), затем берется
    среднее по судьям. Без оценок average равен None, а не 0.
    """
    scores = [s for s in snapshot.scores if s.project_id == project.id]
    return _build_result(project, scores, snapshot.criteria_by_id())


def _ranking_key(result):
    return (round(result.average, _TIE_PRECISION), result.evaluation_count)


def _rank(results, limit=None):
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        raise ValidationError('Лимит рейтинга должен быть положительным целым числом.', field='limit')

    ranked = sorted((r for r in results if r.average is not None), key=_ranking_key, reverse=True)

    entries = []
    previous_key = None
    rank = 0
    for position, result in enumerate(ranked, start=1):
        key = _ranking_key(result)
        # Одинаковые средний балл и число оценок делят одно место
        if key != previous_key:
            rank = position
            previous_key = key
        entries.append(RankingEntry(
            rank=rank,
            project=result.project,
            average=result.average,
            evaluation_count=result.evaluation_count,
        ))

    if limit is not None:
        entries = entries[:limit]
    return entries


def rank_projects(snapshot, track=None, limit=None):
    """
    Рейтинг по убыванию среднего балла, при равенстве - по числу судей.
    Проекты без оценок в рейтинг не попадают.
    """
    results = project_results(snapshot)
    if track is not None:
        results = [r for r in results if r.project.track == track]
    return _rank(results, limit)


def rankings_by_track(snapshot, limit=None):
    results = project_results(snapshot)
    return {
        track: _rank([r for r in results if r.project.track == track], limit)
        for track in TRACKS
    }


def judge_progress(judge, snapshot):
    """
    Для каждого назначенного судье проекта: сколько применимых критериев
    уже оценено и оценен ли проект полностью.
    """
    scored = {(s.project_id, s.criterion_id) for s in snapshot.scores if s.judge_id == judge.id}

    progress = []
    for project in assigned_projects(judge, snapshot.projects):
        required = [c.id for c in snapshot.criteria if c.applies_to(project.track)]
        done = sum(1 for criterion_id in required if (project.id, criterion_id) in scored)
        progress.append({
            'project': project,
            'scored': done,
            'required': len(required),
            # Без критериев оценивать нечего - проект остается в ожидании
            'complete': bool(required) and done == len(required),
        })
    return progress


def _round(value):
    return round(value, 2) if value is not None else None


def _mean(values):
    return sum(values) / len(values) if values else None


def dashboard_stats(snapshot):
    results = project_results(snapshot)
    evaluations = [e for r in results for e in r.judge_evaluations]

    status_counts = {status: 0 for status in PROJECT_STATUSES}
    for project in snapshot.projects:
        status_counts[project.status] = status_counts.get(project.status, 0) + 1

    tracks = {}
    for track in TRACKS:
        track_results = [r for r in results if r.project.track == track]
        averages = [r.average for r in track_results if r.average is not None]
        tracks[track] = {
            'project_count': len(track_results),
            'evaluated_count': len(averages),
            'average_score': _round(_mean(averages)),
            'min_score': _round(min(averages)) if averages else None,
            'max_score': _round(max(averages)) if averages else None,
            'total_evaluations': sum(r.evaluation_count for r in track_results),
        }

    return {
        'total_projects': len(snapshot.projects),
        'total_judges': len(snapshot.judges),
        'total_criteria': len(snapshot.criteria),
        'total_scores': len(snapshot.scores),
        'total_evaluations': len(evaluations),
        'active_evaluators': len({e.judge_id for e in evaluations}),
        'average_score': _round(_mean([e.weighted_mean for e in evaluations])),
        'status_counts': status_counts,
        'tracks': tracks,
    }


def judge_statistics(snapshot):
    """Сколько оценок выставил каждый судья, средний балл и разброс."""
    results = project_results(snapshot)
    criteria_ids = {c.id for c in snapshot.criteria}

    stats = []
    for judge in snapshot.judges:
        means = [
            e.weighted_mean
            for r in results
            for e in r.judge_evaluations
            if e.judge_id == judge.id
        ]
        timestamps = sorted(
            s.created_at for s in snapshot.scores
            if s.judge_id == judge.id and s.criterion_id in criteria_ids and s.created_at
        )
        stats.append({
            'judge': judge,
            'evaluations_completed': len(means),
            'average_given': _round(_mean(means)),
            'score_consistency': _round(statistics.stdev(means)) if len(means) > 1 else None,
            'first_evaluation': timestamps[0] if timestamps else None,
            'last_evaluation': timestamps[-1] if timestamps else None,
        })
    return stats
