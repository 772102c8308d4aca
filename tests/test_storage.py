import json
import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Judge, Project, Snapshot, SnapshotRecord
from storage import SnapshotCache


def _write_raw(key, payload):
    db.session.merge(SnapshotRecord(key=key, payload=payload))
    db.session.commit()


def test_load_without_row_returns_empty_snapshot(snapshot_store):
    snapshot = snapshot_store.load()
    assert snapshot == Snapshot.empty()
    assert snapshot.to_document() == {'projects': [], 'judges': [], 'criteria': [], 'scores': []}


def test_save_replaces_whole_document(snapshot_store):
    project = Project(id='p_1', name='Lend', team_name='Alpha', track='AI & DePIN')
    judge = Judge(id='j_1', name='Ann', email='ann@example.com', tracks=('AI & DePIN',))
    snapshot_store.save(Snapshot(projects=(project,), judges=(judge,)))

    loaded = snapshot_store.load()
    assert loaded.projects == (project,)
    assert loaded.judges == (judge,)

    snapshot_store.save(Snapshot(judges=(judge,)))
    assert snapshot_store.load().projects == ()


def test_persisted_document_uses_four_keys(snapshot_store):
    judge = Judge(id='j_1', name='Ann', email='ann@example.com', tracks=('AI & DePIN',))
    snapshot_store.save(Snapshot(judges=(judge,)))

    record = db.session.get(SnapshotRecord, snapshot_store.key)
    document = json.loads(record.payload)
    assert set(document) == {'projects', 'judges', 'criteria', 'scores'}
    assert document['judges'][0]['isActive'] is True


def _document(**collections):
    document = {'projects': [], 'judges': [], 'criteria': [], 'scores': []}
    document.update(collections)
    return json.dumps(document)


_PROJECT = {'id': 'p_1', 'name': 'Lend', 'teamName': 'Alpha', 'track': 'AI & DePIN'}
_JUDGE = {'id': 'j_1', 'name': 'Ann', 'email': 'ann@example.com', 'tracks': ['AI & DePIN']}


@pytest.mark.parametrize('payload', [
    'not json at all',
    '[]',
    json.dumps({'projects': [], 'judges': [], 'criteria': []}),
    json.dumps({'projects': {}, 'judges': [], 'criteria': [], 'scores': []}),
    _document(projects=[{'id': 'p_1'}]),
    _document(projects=[dict(_PROJECT, teamMembers='abc')]),
    _document(projects=[dict(_PROJECT, name=42)]),
    _document(projects=[dict(_PROJECT, track='Quantum')]),
    _document(projects=[dict(_PROJECT, status='archived')]),
    _document(judges=[dict(_JUDGE, tracks='AI & DePIN')]),
    _document(judges=[dict(_JUDGE, tracks=[7])]),
    _document(judges=[dict(_JUDGE, isActive='yes')]),
    _document(criteria=[{'id': 'c_1', 'name': 'Innovation', 'weight': '2'}]),
    _document(scores=[{'id': 's', 'projectId': 'p_1', 'judgeId': 'j_1', 'criterionId': 'c_1', 'value': True}]),
])
def test_corrupted_payload_is_logged_and_treated_as_empty(snapshot_store, caplog, payload):
    _write_raw(snapshot_store.key, payload)

    with caplog.at_level(logging.WARNING):
        snapshot = snapshot_store.load()

    assert snapshot == Snapshot.empty()
    assert any(r.levelno == logging.WARNING and 'поврежден' in r.getMessage() for r in caplog.records)


def test_extra_top_level_keys_are_ignored(snapshot_store):
    document = {'projects': [], 'judges': [], 'criteria': [], 'scores': [], 'version': 2}
    _write_raw(snapshot_store.key, json.dumps(document))
    assert snapshot_store.load() == Snapshot.empty()


def test_failed_save_is_logged_and_reported(snapshot_store, monkeypatch, caplog):
    project = Project(id='p_1', name='Lend', team_name='Alpha', track='AI & DePIN')
    assert snapshot_store.save(Snapshot(projects=(project,))) is True

    def broken_commit():
        raise SQLAlchemyError('disk is full')

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    with caplog.at_level(logging.ERROR):
        assert snapshot_store.save(Snapshot.empty()) is False

    monkeypatch.undo()
    assert snapshot_store.load().projects == (project,)
    assert any(r.levelno == logging.ERROR and 'disk is full' in r.getMessage() for r in caplog.records)


def test_cache_serves_snapshot_within_window(snapshot_store, clock):
    cache = SnapshotCache(snapshot_store, ttl_seconds=30, clock=clock)
    first = cache.get()

    project = Project(id='p_1', name='Lend', team_name='Alpha', track='AI & DePIN')
    snapshot_store.save(Snapshot(projects=(project,)))

    clock.advance(10)
    assert cache.get() is first

    clock.advance(25)
    assert cache.get().projects == (project,)


def test_cache_with_zero_ttl_always_reloads(snapshot_store, clock):
    cache = SnapshotCache(snapshot_store, ttl_seconds=0, clock=clock)
    cache.get()

    project = Project(id='p_1', name='Lend', team_name='Alpha', track='AI & DePIN')
    snapshot_store.save(Snapshot(projects=(project,)))
    assert cache.get().projects == (project,)


def test_invalidate_replaces_cached_snapshot(snapshot_store, clock):
    cache = SnapshotCache(snapshot_store, ttl_seconds=60, clock=clock)
    cache.get()

    fresh = Snapshot(projects=(Project(id='p_2', name='Quest', team_name='Delta', track='AI & DePIN'),))
    cache.invalidate(fresh)
    assert cache.get() is fresh

    cache.clear()
    assert cache.get() == Snapshot.empty()


def test_well_formed_records_load_with_defaults(snapshot_store):
    _write_raw(snapshot_store.key, _document(projects=[_PROJECT], judges=[_JUDGE]))

    snapshot = snapshot_store.load()

    [project] = snapshot.projects
    assert (project.status, project.trl, project.team_members) == ('pending', 'Ideation', ())
    assert snapshot.judges[0].tracks == ('AI & DePIN',)
    assert snapshot.judges[0].is_active is True
