
import collections
import http.client
import io
import json
import pytest
import requests.adapters
import requests.structures
import urllib.parse

from soundwrap import Client


class MockAdapter(requests.adapters.BaseAdapter):
  """
  A transport adapter that answers requests with queued responses and
  records every request it was sent.
  """

  def __init__(self):
    super().__init__()
    self.responses = collections.deque()
    self.requests = []

  def add_response(self, status=200, headers=None, body=b''):
    if isinstance(body, str):
      body = body.encode('utf8')
    self.responses.append((status, headers or {}, body))

  def add_json(self, data, status=200):
    self.add_response(status, {'Content-Type': 'application/json'}, json.dumps(data))

  def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
    self.requests.append(request)
    status, headers, body = self.responses.popleft()
    response = requests.Response()
    response.status_code = status
    response.reason = http.client.responses.get(status, '')
    response.headers = requests.structures.CaseInsensitiveDict(headers)
    response.raw = io.BytesIO(body)
    response.url = request.url
    response.request = request
    response.connection = self
    return response

  def close(self):
    pass

  def query(self, index=-1):
    """
    Returns the query parameters of a recorded request as a dict.
    """

    url = self.requests[index].url
    return dict(urllib.parse.parse_qsl(urllib.parse.urlsplit(url).query))

  def form(self, index=-1):
    return dict(urllib.parse.parse_qsl(self.requests[index].body))


@pytest.fixture
def options():
  return {
    'client_id': 'myId',
    'client_secret': 'mySecret',
    'redirect_uri': 'http://domain.tld/redirect',
  }


@pytest.fixture
def mock():
  return MockAdapter()


@pytest.fixture
def client(options, mock):
  client = Client(**options)
  client.mount('https://', mock)
  client.mount('http://', mock)
  return client
