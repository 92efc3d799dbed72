"""Pytest configuration and fixtures."""

import json
import time

import pytest
from gi.repository import GLib

from chrisnotes.note_store import NoteStore
from chrisnotes.notes_manager import NotesManager
from chrisnotes.summarization import Summary


class FakeResponse:

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records POSTs and answers with a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload=[{'summary_text': 'Short.'}])
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None):
        self.calls.append({'url': url, 'json': json, 'headers': headers})
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:

    def __init__(self, result=None, error=None):
        self.result = result or Summary('A summary.')
        self.error = error
        self.calls = []

    def summarize(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def wait_until(predicate, timeout=5.0):
    """Iterate the default GLib main context until predicate() holds."""
    context = GLib.MainContext.default()
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError('Timed out waiting for the main loop')
        if not context.iteration(False):
            time.sleep(0.01)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / 'chrisnotes'


@pytest.fixture
def store(data_dir) -> NoteStore:
    return NoteStore(data_dir=str(data_dir))


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def manager(store, client) -> NotesManager:
    return NotesManager(store=store, client=client)
