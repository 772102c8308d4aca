# validation.py
# Проверка входных данных перед созданием или изменением записей

import math
import re

from errors import InvalidRatingError, ValidationError
from models.constants import (
    ALL_TRACKS, DEFAULT_PROJECT_STATUS, DEFAULT_TRL, MAX_RATING, MIN_RATING,
    PROJECT_STATUSES, TRACKS, TRL_LEVELS,
)

EMAIL_RE = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')

PROJECT_FIELDS = (
    'name', 'team_name', 'track', 'description', 'github_url', 'demo_url',
    'video_url', 'contact_email', 'team_members', 'trl', 'status',
)
JUDGE_FIELDS = ('name', 'email', 'tracks', 'role', 'expertise', 'is_active')
CRITERION_FIELDS = ('name', 'weight', 'tracks', 'description')

# Поля, которые нельзя передавать при изменении записи
IMMUTABLE_FIELDS = ('id', 'created_at', 'updated_at')


def check_fields(data, allowed, entity):
    for key in data:
        if key in IMMUTABLE_FIELDS:
            raise ValidationError(f'Поле "{key}" нельзя изменить.', field=key)
        if key not in allowed:
            raise ValidationError(f'Неизвестное поле "{key}" для {entity}.', field=key)


def require_text(value, field, label):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'Поле "{label}" обязательно для заполнения.', field=field)
    return value.strip()


def optional_text(value, field):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'Поле "{field}" должно быть строкой.', field=field)
    return value.strip() or None


def validate_choice(value, choices, field, label):
    if value not in choices:
        raise ValidationError(
            f'Недопустимое значение {label}: "{value}". Допустимо: {", ".join(choices)}.',
            field=field,
        )
    return value


def validate_track(track, field='track'):
    return validate_choice(track, TRACKS, field, 'трека')


def validate_tracks(tracks, field='tracks'):
    if isinstance(tracks, str) or not isinstance(tracks, (list, tuple, set, frozenset)):
        raise ValidationError('Треки нужно передать списком.', field=field)

    cleaned = []
    for track in tracks:
        validate_track(track, field)
        if track not in cleaned:
            cleaned.append(track)
    if not cleaned:
        raise ValidationError('Нужно выбрать хотя бы один трек.', field=field)
    return tuple(cleaned)


def validate_email(value, field='email', required=True):
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError('Email обязателен для заполнения.', field=field)
        return None
    if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
        raise ValidationError(f'Некорректный email: "{value}".', field=field)
    return value.strip()


def validate_string_list(value, field):
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError(f'Поле "{field}" должно быть списком строк.', field=field)
    cleaned = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f'Поле "{field}" должно быть списком строк.', field=field)
        if item.strip():
            cleaned.append(item.strip())
    return tuple(cleaned)


def validate_weight(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError('Вес критерия должен быть числом.', field='weight')
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # целое, которое не помещается во float
        finite = False
    if value <= 0 or not finite:
        raise ValidationError('Вес критерия должен быть положительным числом.', field='weight')
    return value


def validate_rating(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRatingError(value)
    if not MIN_RATING <= value <= MAX_RATING or math.isnan(value):
        raise InvalidRatingError(value)
    return value


def clean_project(data):
    """Возвращает проверенные поля проекта или бросает ValidationError."""
    check_fields(data, PROJECT_FIELDS, 'проекта')
    return {
        'name': require_text(data.get('name'), 'name', 'Название проекта'),
        'team_name': require_text(data.get('team_name'), 'team_name', 'Команда'),
        'track': validate_track(data.get('track')),
        'description': optional_text(data.get('description'), 'description') or '',
        'github_url': optional_text(data.get('github_url'), 'github_url'),
        'demo_url': optional_text(data.get('demo_url'), 'demo_url'),
        'video_url': optional_text(data.get('video_url'), 'video_url'),
        'contact_email': validate_email(data.get('contact_email'), 'contact_email', required=False),
        'team_members': validate_string_list(data.get('team_members'), 'team_members'),
        'trl': validate_choice(data.get('trl') or DEFAULT_TRL, TRL_LEVELS, 'trl', 'TRL'),
        'status': validate_choice(
            data.get('status') or DEFAULT_PROJECT_STATUS, PROJECT_STATUSES, 'status', 'статуса'
        ),
    }


def clean_judge(data):
    check_fields(data, JUDGE_FIELDS, 'судьи')
    is_active = data.get('is_active', True)
    if not isinstance(is_active, bool):
        raise ValidationError('Поле "is_active" должно быть true или false.', field='is_active')
    return {
        'name': require_text(data.get('name'), 'name', 'Имя судьи'),
        'email': validate_email(data.get('email')),
        'tracks': validate_tracks(data.get('tracks')),
        'role': optional_text(data.get('role'), 'role') or 'judge',
        'expertise': validate_string_list(data.get('expertise'), 'expertise'),
        'is_active': is_active,
    }


def clean_criterion(data):
    check_fields(data, CRITERION_FIELDS, 'критерия')
    tracks = data.get('tracks', ALL_TRACKS)
    if tracks is None or tracks == ALL_TRACKS:
        tracks = ALL_TRACKS
    else:
        tracks = validate_tracks(tracks)
    return {
        'name': require_text(data.get('name'), 'name', 'Название критерия'),
        'weight': validate_weight(data.get('weight', 1)),
        'tracks': tracks,
        'description': optional_text(data.get('description'), 'description') or '',
    }
