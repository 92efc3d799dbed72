# SPDX-License-Identifier: GPL-3.0-or-later

import json
import logging
import os

from gi.repository import GLib

from chrisnotes.constants import DATA_DIR_NAME, NOTES_FILE, TAGS_FILE
from chrisnotes.note import Note, Tag
from chrisnotes.settings import StateSettings

logger = logging.getLogger(__name__)


class NoteStore:
    """Whole-file JSON persistence for notes and tags.

    Every save rewrites the file from scratch. Loads never raise: a
    missing or unreadable file comes back as an empty collection.
    """

    def __init__(self, data_dir=None):
        if data_dir is None:
            data_dir = os.path.join(GLib.get_user_data_dir(), DATA_DIR_NAME)
        self._data_dir = data_dir
        try:
            os.makedirs(data_dir, exist_ok=True)
        except OSError as e:
            logger.error('Failed to create data directory %s: %s', data_dir, e)

        self._notes_path = os.path.join(data_dir, NOTES_FILE)
        self._tags_path = os.path.join(data_dir, TAGS_FILE)
        self._settings = StateSettings(data_dir)

    @property
    def data_dir(self):
        return self._data_dir

    @property
    def data_dir_exists(self) -> bool:
        return os.path.isdir(self._data_dir)

    # --- Notes ---

    def load_notes(self) -> list[Note]:
        logger.debug('Loading notes from %s', self._notes_path)
        notes = self._load(self._notes_path, Note.from_dict)
        logger.info('Loaded %d notes', len(notes))
        return notes

    def save_notes(self, notes, selected_note_id=None):
        logger.debug('Saving notes to %s', self._notes_path)
        if self._dump(self._notes_path, [note.to_dict() for note in notes]):
            self._settings.set_selected_note_id(selected_note_id)

    def load_selected_note_id(self):
        return self._settings.get_selected_note_id()

    # --- Tags ---

    def load_tags(self) -> list[Tag]:
        return self._load(self._tags_path, Tag.from_dict)

    def save_tags(self, tags):
        self._dump(self._tags_path, [tag.to_dict() for tag in tags])

    # --- Helpers ---

    def _load(self, path, from_dict):
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise TypeError(f'expected a JSON array, got {type(data).__name__}')
            return [from_dict(item) for item in data]
        except FileNotFoundError:
            logger.info('%s does not exist yet', path)
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning('Failed to load %s: %s', path, e)
        return []

    def _dump(self, path, data) -> bool:
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error('Failed to save %s: %s', path, e)
            return False
        return True
