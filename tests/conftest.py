import json
from contextlib import asynccontextmanager
from unittest import mock

import pytest
import requests
from aiohttp import web
from aiohttp.test_utils import TestServer

from urlfreezer.api.client import Client

SERVICE_HOST = 'http://freezer.test'

FROZEN_RESPONSE = {
    'links': [
        {
            'link': 'http://exp.com/bla',
            'link_label': 'nana',
            'action': 'Redirect',
            'link_id': 'ASXDAERERE'
        }
    ],
    'base': 'https://example.com'
}


def make_response(body=None, status=200, raw=None):
    response = requests.Response()
    response.status_code = status
    if raw is None:
        raw = json.dumps(body)
    response._content = raw.encode('utf-8') if isinstance(raw, str) else raw
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def stub_client():
    """Build a blocking client whose session answers every POST with the given body."""
    def build(body=None, status=200, raw=None):
        session = requests.Session()
        session.post = mock.Mock(return_value=make_response(body, status, raw))
        return Client.connect_host(SERVICE_HOST, 'nothing', session=session)
    return build


@pytest.fixture
def fake_service():
    """Serve a fake fetch links endpoint on a local port."""
    @asynccontextmanager
    async def serve(body=None, status=200, raw=None):
        received = []

        async def handler(request):
            received.append(await request.json())
            if raw is not None:
                return web.Response(status=status, text=raw, content_type='application/json')
            return web.json_response(body, status=status)

        app = web.Application()
        app.router.add_post('/api/fetch_links_v2', handler)
        server = TestServer(app)
        await server.start_server()
        try:
            yield f'http://{server.host}:{server.port}', received
        finally:
            await server.close()
    return serve
