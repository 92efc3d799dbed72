# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os

from gi.repository import GLib

from chrisnotes.constants import SELECTED_NOTE_KEY, STATE_FILE, STATE_GROUP

logger = logging.getLogger(__name__)


class StateSettings:
    """Small key-value store for UI state, backed by a GLib key file."""

    def __init__(self, data_dir):
        self._path = os.path.join(data_dir, STATE_FILE)

    def _load(self):
        key_file = GLib.KeyFile()
        if os.path.exists(self._path):
            try:
                key_file.load_from_file(self._path, GLib.KeyFileFlags.NONE)
            except GLib.Error as e:
                logger.warning('Failed to read %s: %s', self._path, e.message)
        return key_file

    def get_selected_note_id(self):
        key_file = self._load()
        try:
            value = key_file.get_string(STATE_GROUP, SELECTED_NOTE_KEY)
        except GLib.Error:
            return None
        return value or None

    def set_selected_note_id(self, note_id):
        key_file = self._load()
        if note_id is not None:
            key_file.set_string(STATE_GROUP, SELECTED_NOTE_KEY, note_id)
        else:
            # Missing group or key: nothing to clear.
            try:
                key_file.remove_key(STATE_GROUP, SELECTED_NOTE_KEY)
            except GLib.Error:
                pass

        try:
            key_file.save_to_file(self._path)
        except GLib.Error as e:
            logger.error('Failed to save %s: %s', self._path, e.message)
