# models/__init__.py
# Инициализация моделей

from .constants import TRACKS, PROJECT_STATUSES, TRL_LEVELS, ALL_TRACKS
from .project import Project
from .judge import Judge
from .criterion import Criterion
from .score import Score, score_id_for
from .snapshot import Snapshot
from .snapshot_record import SnapshotRecord
