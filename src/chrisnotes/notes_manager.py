# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import threading

from gi.repository import GLib, GObject

from chrisnotes.colors import get_color
from chrisnotes.note import Note, Tag
from chrisnotes.note_store import NoteStore
from chrisnotes.summarization import SummarizationClient, SummarizationError

logger = logging.getLogger(__name__)


class NotesManager(GObject.Object):
    """Owns notes, tags, selection and tag filter; the state a UI binds to.

    Every mutation is written to disk before the matching signal is
    emitted. Must be driven from the thread running the default GLib
    main context.
    """

    __gsignals__ = {
        'notes-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
        'tags-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
        'filter-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self, store=None, client=None):
        super().__init__()
        self.store = store if store is not None else NoteStore()
        self._client = client if client is not None else SummarizationClient()
        self._selected_note_id = None
        self._selected_tags = set()
        self._is_summarizing = False

        self._tags = self.store.load_tags()
        self._notes = self.store.load_notes()
        selected_id = self.store.load_selected_note_id()
        if self._find_note(selected_id) is not None:
            self._selected_note_id = selected_id

    # --- Observable state ---

    @GObject.Property(type=object)
    def selected_note(self):
        return self._find_note(self._selected_note_id)

    @GObject.Property(type=bool, default=False)
    def is_summarizing(self):
        return self._is_summarizing

    @property
    def notes(self) -> list[Note]:
        return list(self._notes)

    @property
    def tags(self) -> list[Tag]:
        return list(self._tags)

    @property
    def selected_tags(self) -> frozenset:
        return frozenset(self._selected_tags)

    @property
    def filtered_notes(self) -> list[Note]:
        if not self._selected_tags:
            return list(self._notes)
        return [n for n in self._notes if not n.tag_ids.isdisjoint(self._selected_tags)]

    @property
    def is_directory_selected(self) -> bool:
        return self.store.data_dir_exists

    def tags_for_note(self, note) -> list[Tag]:
        """Tags attached to a note, in registry order."""
        return [tag for tag in self._tags if tag.id in note.tag_ids]

    # --- Selection and filter ---

    def select_note(self, note):
        note_id = note.id if note is not None else None
        if note_id is not None and self._find_note(note_id) is None:
            return
        self._set_selected(note_id)

    def toggle_tag_filter(self, tag):
        if tag.id in self._selected_tags:
            self._selected_tags.discard(tag.id)
        elif self._find_tag(tag.id) is not None:
            self._selected_tags.add(tag.id)
        else:
            return
        self.emit('filter-changed')

    # --- Tags ---

    def add_tag(self, name, color) -> Tag:
        tag = Tag(name=name, color=color)
        self._tags.append(tag)
        self.store.save_tags(self._tags)
        self.emit('tags-changed')
        return tag

    def delete_tag(self, tag):
        # Notes first so no note on disk points at a missing tag.
        for note in self._notes:
            note.tag_ids.discard(tag.id)
        self._save_notes()
        self.emit('notes-changed')

        self._tags = [t for t in self._tags if t.id != tag.id]
        self.store.save_tags(self._tags)
        self.emit('tags-changed')

        if tag.id in self._selected_tags:
            self._selected_tags.discard(tag.id)
            self.emit('filter-changed')

    @staticmethod
    def get_color(tag) -> str:
        return get_color(tag)

    # --- Notes ---

    def add_note(self) -> Note:
        note = Note()
        self._notes.append(note)
        self._selected_note_id = note.id
        self._save_notes()
        self.emit('notes-changed')
        self.notify('selected-note')
        return note

    def update_note(self, note, content):
        current = self._find_note(note.id)
        if current is None:
            return
        current.content = content
        self._selected_note_id = current.id
        self._save_notes()
        self.emit('notes-changed')
        self.notify('selected-note')

    def delete_note(self, note):
        current = self._find_note(note.id)
        if current is None:
            return
        self._notes.remove(current)
        was_selected = self._selected_note_id == current.id
        if was_selected:
            self._selected_note_id = self._notes[0].id if self._notes else None
        self._save_notes()
        self.emit('notes-changed')
        if was_selected:
            self.notify('selected-note')

    def toggle_tag_for_note(self, tag, note):
        current = self._find_note(note.id)
        if current is None:
            return
        if tag.id in current.tag_ids:
            current.tag_ids.discard(tag.id)
        else:
            current.tag_ids.add(tag.id)
        self._save_notes()
        self.emit('notes-changed')
        if self._selected_note_id == current.id:
            self.notify('selected-note')

    # --- Summarization ---

    def summarize_selected_note(self):
        """Summarize the selected note in the background.

        Returns the worker thread, or None when there is nothing to
        summarize or a summarization is already running. The result is
        applied on the GLib main context.
        """
        note = self.selected_note
        if note is None or not note.content:
            return None
        if self._is_summarizing:
            logger.debug('Summarization already in progress, ignoring request')
            return None

        self._set_summarizing(True)
        thread = threading.Thread(
            target=self._summarize_worker,
            args=(note.id, note.content),
            name='chrisnotes-summarize',
            daemon=True,
        )
        thread.start()
        return thread

    def _summarize_worker(self, note_id, content):
        summary = None
        try:
            summary = self._client.summarize(content)
        except SummarizationError as e:
            logger.error('Summarization error: %s', e)
        except Exception:
            logger.exception('Unexpected summarization failure')
        finally:
            # The busy flag is cleared on the main context whatever happened.
            GLib.idle_add(self._on_summarize_done, note_id, summary)

    def _on_summarize_done(self, note_id, summary):
        if summary is not None:
            if summary.placeholder:
                logger.info('Service returned no summaries for note %s', note_id)
            note = self._find_note(note_id)
            if note is not None:
                note.summary = summary.text
                self._selected_note_id = note.id
                self._save_notes()
                self.emit('notes-changed')
                self.notify('selected-note')
        self._set_summarizing(False)
        return GLib.SOURCE_REMOVE

    # --- Helpers ---

    def _set_selected(self, note_id):
        if note_id == self._selected_note_id:
            return
        self._selected_note_id = note_id
        self.notify('selected-note')

    def _set_summarizing(self, value):
        self._is_summarizing = value
        self.notify('is-summarizing')

    def _save_notes(self):
        self.store.save_notes(self._notes, self._selected_note_id)

    def _find_note(self, note_id):
        if note_id is None:
            return None
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def _find_tag(self, tag_id):
        for tag in self._tags:
            if tag.id == tag_id:
                return tag
        return None
