# SPDX-License-Identifier: GPL-3.0-or-later

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from chrisnotes.constants import NOTE_TITLE_PLACEHOLDER

# Tab plus the Unicode space separators; line breaks such as \r are kept.
HORIZONTAL_WHITESPACE = (
    '\t \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006'
    '\u2007\u2008\u2009\u200a\u202f\u205f\u3000'
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_str(data, key) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f'{key} must be a string, got {type(value).__name__}')
    return value


@dataclass
class Note:
    content: str = ''
    date_created: str = field(default_factory=lambda: datetime.now().isoformat())
    summary: Optional[str] = None
    tag_ids: set[str] = field(default_factory=set)
    id: str = field(default_factory=_new_id)

    @property
    def title(self) -> str:
        """First non-empty line of the content, or a placeholder."""
        lines = [line for line in self.content.split('\n') if line]
        first_line = lines[0].strip(HORIZONTAL_WHITESPACE) if lines else ''
        return first_line or NOTE_TITLE_PLACEHOLDER

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'content': self.content,
            'dateCreated': self.date_created,
            'tagIds': sorted(self.tag_ids),
        }
        if self.summary is not None:
            data['summary'] = self.summary
        return data

    @classmethod
    def from_dict(cls, data) -> 'Note':
        summary = data.get('summary')
        if summary is not None and not isinstance(summary, str):
            raise TypeError('summary must be a string')
        tag_ids = data.get('tagIds', [])
        if not isinstance(tag_ids, list) or not all(isinstance(t, str) for t in tag_ids):
            raise TypeError('tagIds must be a list of strings')
        return cls(
            id=_require_str(data, 'id'),
            content=_require_str(data, 'content'),
            date_created=_require_str(data, 'dateCreated'),
            summary=summary,
            tag_ids=set(tag_ids),
        )


@dataclass
class Tag:
    name: str
    color: str
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'color': self.color}

    @classmethod
    def from_dict(cls, data) -> 'Tag':
        return cls(
            id=_require_str(data, 'id'),
            name=_require_str(data, 'name'),
            color=_require_str(data, 'color'),
        )
