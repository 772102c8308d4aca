# models/constants.py
# Фиксированные перечисления предметной области

from datetime import datetime, timezone

TRACKS = (
    'Onchain Finance & RWA',
    'DLT Operations & ESG',
    'AI & DePIN',
    'Gaming & Metaverse',
)

# Статусы проекта: 'pending', 'in_review', 'evaluated', 'winner'
PROJECT_STATUSES = ('pending', 'in_review', 'evaluated', 'winner')
DEFAULT_PROJECT_STATUS = 'pending'

TRL_LEVELS = ('Ideation', 'Prototype')
DEFAULT_TRL = 'Ideation'

# Критерий, применимый ко всем трекам
ALL_TRACKS = 'all'

MIN_RATING = 1
MAX_RATING = 10


def utc_now():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
