"""Tests for the summarization client."""

import pytest
import requests

from chrisnotes.constants import SUMMARY_PLACEHOLDER
from chrisnotes.summarization import (
    SummarizationClient,
    SummarizationError,
    SummarizationServiceError,
    Summary,
)

from conftest import FakeResponse, FakeSession


def make_client(session):
    return SummarizationClient(token='secret', endpoint='https://example.test/model', session=session)


def test_request_shape():
    session = FakeSession()
    make_client(session).summarize('Some long text')

    call = session.calls[0]
    assert call['url'] == 'https://example.test/model'
    assert call['json'] == {
        'inputs': 'Some long text',
        'parameters': {'max_length': 130, 'min_length': 30},
    }
    assert call['headers']['Authorization'] == 'Bearer secret'
    assert call['headers']['Content-Type'] == 'application/json'


def test_uses_first_result():
    session = FakeSession(FakeResponse(payload=[
        {'summary_text': 'first'},
        {'summary_text': 'second'},
    ]))

    assert make_client(session).summarize('text') == Summary('first')


def test_empty_result_list_gives_placeholder():
    session = FakeSession(FakeResponse(payload=[]))

    summary = make_client(session).summarize('text')

    assert summary.text == SUMMARY_PLACEHOLDER
    assert summary.placeholder


def test_empty_text_is_rejected_before_request():
    session = FakeSession()

    with pytest.raises(ValueError):
        make_client(session).summarize('')
    assert session.calls == []


def test_error_status_is_reported_before_decoding():
    session = FakeSession(FakeResponse(status_code=503, payload={'error': 'Model is loading'}))

    with pytest.raises(SummarizationServiceError) as excinfo:
        make_client(session).summarize('text')
    assert excinfo.value.status_code == 503
    assert 'Model is loading' in excinfo.value.body


@pytest.mark.parametrize(
    'response',
    [
        FakeResponse(text='<html>oops</html>'),
        FakeResponse(payload={'summary_text': 'not in a list'}),
        FakeResponse(payload=[{'generated_text': 'wrong key'}]),
        FakeResponse(payload=[{'summary_text': 'ok'}, 'junk']),
    ],
)
def test_undecodable_response_fails(response):
    with pytest.raises(SummarizationError):
        make_client(FakeSession(response)).summarize('text')


def test_transport_error_fails():
    session = FakeSession(error=requests.ConnectionError('unreachable'))

    with pytest.raises(SummarizationError):
        make_client(session).summarize('text')


def test_token_read_from_environment(monkeypatch):
    monkeypatch.setenv('CHRISNOTES_HF_TOKEN', 'from-env')
    session = FakeSession()

    SummarizationClient(session=session).summarize('text')

    assert session.calls[0]['headers']['Authorization'] == 'Bearer from-env'


def test_unencodable_request_fails():
    error = UnicodeEncodeError('latin-1', 'Bearer t€', 8, 9, 'ordinal not in range(256)')
    session = FakeSession(error=error)

    with pytest.raises(SummarizationError):
        make_client(session).summarize('text')
