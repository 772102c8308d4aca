# models/criterion.py

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from . import document
from .constants import ALL_TRACKS


@dataclass(frozen=True)
class Criterion:
    id: str
    name: str
    weight: float = 1
    # ALL_TRACKS ('all') или кортеж треков
    tracks: Union[str, Tuple[str, ...]] = ALL_TRACKS
    description: str = ''
    created_at: Optional[str] = None

    def applies_to(self, track):
        return self.tracks == ALL_TRACKS or track in self.tracks

    def to_document(self):
        return {
            'id': self.id,
            'name': self.name,
            'weight': self.weight,
            'tracks': self.tracks if self.tracks == ALL_TRACKS else list(self.tracks),
            'description': self.description,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_document(cls, doc):
        tracks = doc.get('tracks', ALL_TRACKS)
        if tracks != ALL_TRACKS:
            tracks = document.text_list(doc, 'tracks', required=True)
        return cls(
            id=document.text(doc, 'id'),
            name=document.text(doc, 'name'),
            weight=document.number(doc, 'weight', 1),
            tracks=tracks,
            description=document.optional_text(doc, 'description', ''),
            created_at=document.optional_text(doc, 'createdAt'),
        )
