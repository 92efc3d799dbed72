# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
from dataclasses import dataclass

import requests

from chrisnotes.constants import (
    SUMMARY_ENDPOINT,
    SUMMARY_MAX_LENGTH,
    SUMMARY_MIN_LENGTH,
    SUMMARY_PLACEHOLDER,
    SUMMARY_TOKEN_ENV,
)

logger = logging.getLogger(__name__)


class SummarizationError(Exception):
    """The summary could not be produced."""


class SummarizationServiceError(SummarizationError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code, body=''):
        super().__init__(f'Summarization service returned HTTP {status_code}')
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class Summary:
    text: str
    placeholder: bool = False


class SummarizationClient:
    """Client for the hosted summarization model.

    One POST per call. There is no retry and no timeout beyond what the
    transport does by default.
    """

    def __init__(self, token=None, endpoint=SUMMARY_ENDPOINT, session=None):
        if token is None:
            token = os.getenv(SUMMARY_TOKEN_ENV, '')
        self._token = token
        self._endpoint = endpoint
        self._session = session or requests.Session()

    def summarize(self, text) -> Summary:
        if not text:
            raise ValueError('Cannot summarize empty text')

        payload = {
            'inputs': text,
            'parameters': {
                'max_length': SUMMARY_MAX_LENGTH,
                'min_length': SUMMARY_MIN_LENGTH,
            },
        }
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self._token}',
        }

        try:
            response = self._session.post(self._endpoint, json=payload, headers=headers)
        except requests.RequestException as e:
            raise SummarizationError(f'Request failed: {e}') from e
        except UnicodeError as e:
            raise SummarizationError(f'Could not encode request: {e}') from e

        if not 200 <= response.status_code < 300:
            raise SummarizationServiceError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise SummarizationError(f'Response is not valid JSON: {e}') from e
        logger.debug('Raw summarization response: %r', data)

        return self._parse(data)

    @staticmethod
    def _parse(data) -> Summary:
        if not isinstance(data, list):
            raise SummarizationError('Expected a JSON array of summaries')
        if not data:
            return Summary(SUMMARY_PLACEHOLDER, placeholder=True)

        # Every element must decode, not just the one we use.
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get('summary_text'), str):
                raise SummarizationError('Malformed summary entry')
        return Summary(data[0]['summary_text'])
