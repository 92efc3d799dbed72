# SPDX-License-Identifier: GPL-3.0-or-later

import os

DATA_DIR_NAME = 'chrisnotes'
NOTES_FILE = 'notes.json'
TAGS_FILE = 'tags.json'
STATE_FILE = 'state.ini'

STATE_GROUP = 'state'
SELECTED_NOTE_KEY = 'selected-note-id'

NOTE_TITLE_PLACEHOLDER = 'New Note'

SUMMARY_ENDPOINT = os.getenv(
    'CHRISNOTES_SUMMARY_ENDPOINT',
    'https://api-inference.huggingface.co/models/facebook/bart-large-cnn',
)
SUMMARY_TOKEN_ENV = 'CHRISNOTES_HF_TOKEN'
SUMMARY_MAX_LENGTH = 130
SUMMARY_MIN_LENGTH = 30
SUMMARY_PLACEHOLDER = 'Could not generate summary.'
