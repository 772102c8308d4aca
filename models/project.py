# models/project.py

from dataclasses import dataclass
from typing import Optional, Tuple

from . import document
from .constants import DEFAULT_PROJECT_STATUS, DEFAULT_TRL, PROJECT_STATUSES, TRACKS, TRL_LEVELS


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    team_name: str
    track: str
    description: str = ''
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    video_url: Optional[str] = None
    contact_email: Optional[str] = None
    team_members: Tuple[str, ...] = ()
    trl: str = DEFAULT_TRL
    status: str = DEFAULT_PROJECT_STATUS
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_document(self):
        return {
            'id': self.id,
            'name': self.name,
            'teamName': self.team_name,
            'track': self.track,
            'description': self.description,
            'githubUrl': self.github_url,
            'demoUrl': self.demo_url,
            'videoUrl': self.video_url,
            'contactEmail': self.contact_email,
            'teamMembers': list(self.team_members),
            'trl': self.trl,
            'status': self.status,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=document.text(doc, 'id'),
            name=document.text(doc, 'name'),
            team_name=document.text(doc, 'teamName'),
            track=document.choice(doc, 'track', TRACKS),
            description=document.optional_text(doc, 'description', ''),
            github_url=document.optional_text(doc, 'githubUrl'),
            demo_url=document.optional_text(doc, 'demoUrl'),
            video_url=document.optional_text(doc, 'videoUrl'),
            contact_email=document.optional_text(doc, 'contactEmail'),
            team_members=document.text_list(doc, 'teamMembers'),
            trl=document.choice(doc, 'trl', TRL_LEVELS, DEFAULT_TRL),
            status=document.choice(doc, 'status', PROJECT_STATUSES, DEFAULT_PROJECT_STATUS),
            created_at=document.optional_text(doc, 'createdAt'),
            updated_at=document.optional_text(doc, 'updatedAt'),
        )
