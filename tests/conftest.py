import pytest

from app import create_app
from config import TestConfig
from extensions import get_evaluation_store
from notifier import ChangeNotifier
from repository import EvaluationStore
from storage import SnapshotCache, SnapshotStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def snapshot_store(app):
    return SnapshotStore(app.config['JUDGING_SNAPSHOT_KEY'])


@pytest.fixture
def evaluation_store(snapshot_store, clock):
    cache = SnapshotCache(snapshot_store, ttl_seconds=60, clock=clock)
    return EvaluationStore(snapshot_store, cache=cache, notifier=ChangeNotifier())


@pytest.fixture
def app_store(app):
    return get_evaluation_store()


@pytest.fixture
def hackathon(evaluation_store):
    """Два трека, два судьи, два критерия по умолчанию."""
    store = evaluation_store
    finance = store.projects.create(name='Lend', team_name='Alpha', track='Onchain Finance & RWA')
    gaming = store.projects.create(name='Quest', team_name='Delta', track='Gaming & Metaverse')
    judge_j = store.judges.create(name='Judge J', email='j@example.com', tracks=['Onchain Finance & RWA'])
    judge_k = store.judges.create(
        name='Judge K', email='k@example.com', tracks=['Onchain Finance & RWA', 'Gaming & Metaverse']
    )
    innovation = store.criteria.create(name='Innovation', weight=1)
    technical = store.criteria.create(name='Technical', weight=1)
    return {
        'store': store,
        'finance': finance,
        'gaming': gaming,
        'judge_j': judge_j,
        'judge_k': judge_k,
        'innovation': innovation,
        'technical': technical,
    }
