import json
from dataclasses import FrozenInstanceError

import pytest

from urlfreezer.api.codec import encode, decode, resolve, to_link_infos
from urlfreezer.api.models import (
    LinkAction, LinkToFetch, LinkMatch, FetchedBatch,
    ProtocolDecodeError, UrlParseError
)

from conftest import FROZEN_RESPONSE


def _match(link_id='ASXDAERERE', action=LinkAction.REDIRECT):
    return LinkMatch(link='http://exp.com/bla', link_label='nana', link_id=link_id, action=action)


def test_link_to_fetch_label_defaults_to_none_and_is_immutable():
    link = LinkToFetch('http://exp.com/bla')

    assert link.label is None
    with pytest.raises(FrozenInstanceError):
        link.link = 'http://other.com'


def test_encode_keeps_order_labels_and_page():
    batch = encode('user-1', 'http://local.com/page.html', [
        LinkToFetch('http://a.com', 'first'),
        LinkToFetch('http://b.com'),
        LinkToFetch(''),
    ])

    assert batch.to_dict() == {
        'user': 'user-1',
        'page': 'http://local.com/page.html',
        'links': [
            {'link': 'http://a.com', 'link_label': 'first'},
            {'link': 'http://b.com', 'link_label': None},
            {'link': '', 'link_label': None},
        ]
    }


def test_encode_without_page_serializes_null():
    payload = json.loads(json.dumps(encode('u', None, [LinkToFetch('http://a.com')]).to_dict()))

    assert payload['page'] is None


def test_decode_valid_response():
    batch = decode(json.dumps(FROZEN_RESPONSE))

    assert batch.base == 'https://example.com'
    assert batch.links == [_match()]


def test_decode_accepts_bytes_and_null_label():
    body = {'links': [{'link': 'http://a.com', 'link_label': None, 'link_id': 'X', 'action': 'Content'}],
            'base': 'https://example.com/'}

    batch = decode(json.dumps(body).encode('utf-8'))

    assert batch.links[0].link_label is None
    assert batch.links[0].action is LinkAction.CONTENT


@pytest.mark.parametrize('raw', [
    'not json',
    '[]',
    '{"base": "https://example.com"}',
    '{"links": []}',
    '{"links": {}, "base": "https://example.com"}',
    '{"links": [{"link": "http://a.com", "action": "Redirect"}], "base": "https://example.com"}',
    '{"links": [{"link": "http://a.com", "link_id": "X", "action": "Follow"}], "base": "https://example.com"}',
    '{"links": ["http://a.com"], "base": "https://example.com"}',
    '{"links": [], "base": 42}',
])
def test_decode_rejects_malformed_payloads(raw):
    with pytest.raises(ProtocolDecodeError):
        decode(raw)


@pytest.mark.parametrize('base', ['not a url', 'example.com', 'ftp://example.com', ''])
def test_decode_rejects_invalid_base(base):
    with pytest.raises(UrlParseError):
        decode(json.dumps({'links': [], 'base': base}))


def test_resolve_joins_link_id_against_base():
    info = resolve('https://example.com', 'http://local.com/page.html', _match())

    assert info.link == 'https://example.com/ASXDAERERE'
    assert info.original == 'http://exp.com/bla'
    assert info.page == 'http://local.com/page.html'
    assert info.label == 'nana'
    assert info.action is LinkAction.REDIRECT


@pytest.mark.parametrize('base, link_id, expected', [
    ('https://example.com/l/', 'abc', 'https://example.com/l/abc'),
    ('https://example.com/l/x', 'abc', 'https://example.com/l/abc'),
    ('https://example.com/l/', '/abc', 'https://example.com/abc'),
    ('https://example.com/l/', '../abc', 'https://example.com/abc'),
])
def test_resolve_follows_relative_reference_rules(base, link_id, expected):
    assert resolve(base, None, _match(link_id)).link == expected


@pytest.mark.parametrize('link_id', ['with space', 'line\nbreak', 'http://[::1'])
def test_resolve_rejects_uncomposable_link_ids(link_id):
    with pytest.raises(UrlParseError):
        resolve('https://example.com', None, _match(link_id))


def test_to_link_infos_preserves_order():
    batch = FetchedBatch(links=[_match('A'), _match('B', LinkAction.CONTENT)], base='https://example.com')

    infos = to_link_infos(batch, None)

    assert [i.link for i in infos] == ['https://example.com/A', 'https://example.com/B']
    assert [i.action for i in infos] == [LinkAction.REDIRECT, LinkAction.CONTENT]
    assert all(i.page is None for i in infos)
