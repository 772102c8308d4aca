# models/score.py

from dataclasses import dataclass
from typing import Optional, Union

from . import document


def score_id_for(project_id, judge_id, criterion_id):
    # Идентификатор выводится из тройки, поэтому повторная оценка перезаписывает старую
    return f's:{project_id}:{judge_id}:{criterion_id}'


@dataclass(frozen=True)
class Score:
    id: str
    project_id: str
    judge_id: str
    criterion_id: str
    value: Union[int, float]
    comment: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def key(self):
        return (self.project_id, self.judge_id, self.criterion_id)

    def to_document(self):
        return {
            'id': self.id,
            'projectId': self.project_id,
            'judgeId': self.judge_id,
            'criterionId': self.criterion_id,
            'value': self.value,
            'comment': self.comment,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=document.text(doc, 'id'),
            project_id=document.text(doc, 'projectId'),
            judge_id=document.text(doc, 'judgeId'),
            criterion_id=document.text(doc, 'criterionId'),
            value=document.number(doc, 'value'),
            comment=document.optional_text(doc, 'comment'),
            created_at=document.optional_text(doc, 'createdAt'),
            updated_at=document.optional_text(doc, 'updatedAt'),
        )
