# models/judge.py

from dataclasses import dataclass
from typing import Optional, Tuple

from . import document
from .constants import TRACKS


@dataclass(frozen=True)
class Judge:
    id: str
    name: str
    email: str
    tracks: Tuple[str, ...]
    role: str = 'judge'
    expertise: Tuple[str, ...] = ()
    is_active: bool = True
    created_at: Optional[str] = None

    def can_score(self, track):
        return track in self.tracks

    def to_document(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'tracks': list(self.tracks),
            'role': self.role,
            'expertise': list(self.expertise),
            'isActive': self.is_active,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_document(cls, doc):
        tracks = document.text_list(doc, 'tracks', required=True)
        for track in tracks:
            if track not in TRACKS:
                raise ValueError(f'tracks has unknown value {track!r}')
        return cls(
            id=document.text(doc, 'id'),
            name=document.text(doc, 'name'),
            email=document.text(doc, 'email'),
            tracks=tracks,
            role=document.optional_text(doc, 'role', 'judge'),
            expertise=document.text_list(doc, 'expertise'),
            is_active=document.flag(doc, 'isActive', True),
            created_at=document.optional_text(doc, 'createdAt'),
        )
