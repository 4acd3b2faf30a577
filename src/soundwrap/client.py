
"""
A simple SoundCloud API client. Every method maps to exactly one endpoint
of the API, see https://developers.soundcloud.com/docs/api/reference.
"""

from . import USER_AGENT
from .auth import AUTH_TYPE, SoundCloudAuth
from .errors import ConfigurationError

import collections.abc
import io
import logging
import requests
import urllib.parse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.soundcloud.com'
CONNECT_URI = 'https://soundcloud.com/connect'
TOKEN_PATH = '/oauth2/token'


def decode_response(response):
  """
  Returns the decoded JSON payload of *response* if its content type is
  `application/json`, otherwise the raw body as a binary stream.
  """

  content_type = response.headers.get('Content-Type', '')
  if 'application/json' in content_type.lower():
    return response.json()
  return io.BytesIO(response.content)


class Client(requests.Session):
  """
  SoundCloud API client. Requires at least the *client_id* of your
  application, which is sent along with anonymous requests. Once an OAuth
  token is available (passed in or obtained with #login()), it is sent
  instead.

  Relative URLs are resolved against *base_url*. Requests that should be
  signed must pass `auth='soundcloud'` (#AUTH_TYPE).

  :param headers: Additional headers, overriding the defaults.
  """

  def __init__(self, client_id=None, client_secret=None, redirect_uri=None,
               oauth_token=None, base_url=DEFAULT_BASE_URL, headers=None):
    super().__init__()
    self.credentials = SoundCloudAuth(client_id, client_secret, redirect_uri, oauth_token)
    self.base_url = base_url
    self.headers.update({
      'Accept': 'application/json',
      'User-Agent': USER_AGENT,
    })
    if headers:
      self.headers.update(headers)

  @classmethod
  def from_config(cls, config):
    """
    Creates a #Client from a configuration mapping, eg. loaded from a JSON
    file. Next to the credential options, the keys `base_url` and `headers`
    are accepted.
    """

    if not isinstance(config, collections.abc.Mapping):
      raise ConfigurationError('Expected a mapping, got {}'.format(type(config).__name__))
    config = dict(config)
    kwargs = {k: config.pop(k) for k in ('base_url', 'headers') if k in config}
    credentials = SoundCloudAuth.from_config(config)
    return cls(credentials.client_id, credentials.client_secret,
               credentials.redirect_uri, credentials.oauth_token, **kwargs)

  @property
  def oauth_token(self):
    return self.credentials.oauth_token

  @oauth_token.setter
  def oauth_token(self, token):
    self.credentials.oauth_token = token

  def url_for(self, path):
    """
    Returns the absolute URL for *path*. URLs that are already absolute
    are returned unchanged.
    """

    if urllib.parse.urlsplit(path).scheme:
      return path
    return self.base_url.rstrip('/') + '/' + path.lstrip('/')

  def request(self, method, url, **kwargs):
    """
    Performs a request, signing it if *auth* is #AUTH_TYPE. A 4xx or 5xx
    response raises a #requests.HTTPError.
    """

    url = self.url_for(url)
    kwargs['auth'] = self.credentials.resolve(kwargs.get('auth'))
    logger.debug('{} {} (params: {})'.format(method, url, kwargs.get('params')))
    response = super().request(method, url, **kwargs)
    response.raise_for_status()
    return response

  def rebuild_auth(self, prepared_request, response):
    """
    Signs a redirected request again if the request that was redirected was
    signed and the redirect stays on the API host.
    """

    super().rebuild_auth(prepared_request, response)
    signed_by = getattr(response.request, 'signed_by', None)
    if signed_by is self.credentials and self.is_api_url(prepared_request.url):
      self.credentials(prepared_request)

  def is_api_url(self, url):
    return urllib.parse.urlsplit(url).hostname == urllib.parse.urlsplit(self.base_url).hostname

  # OAuth2

  def get_token_auth_uri(self, params=None, connect_uri=CONNECT_URI):
    """
    Returns the URI of the authorization endpoint where a user can grant
    access to your application. Entries in *params* override the defaults.
    """

    query = {
      'client_id': self.credentials.client_id,
      'client_secret': self.credentials.client_secret,
      'redirect_uri': self.credentials.redirect_uri,
      'response_type': 'code',
      'scope': 'non-expiring',
    }
    if params:
      query.update(params)
    query = {k: ('' if v is None else v) for k, v in query.items()}
    return connect_uri + '?' + urllib.parse.urlencode(query)

  def login(self, username, password):
    """
    Retrieves a token using the user's credentials and stores it on the
    client, so subsequent requests are made on behalf of that user.
    """

    body = self.get_token_using_credentials(username, password)
    self.credentials.oauth_token = body['access_token']
    logger.info('Logged in as {!r}'.format(username))
    return body

  def get_token_using_credentials(self, username, password):
    return self._get_oauth_token({
      'username': username,
      'password': password,
      'grant_type': 'password',
    })

  def get_token_using_code(self, code):
    """
    Retrieves a token with the authorization *code* that was passed to your
    redirect URI.
    """

    return self._get_oauth_token({
      'code': code,
      'grant_type': 'authorization_code',
      'redirect_uri': self.credentials.redirect_uri,
    })

  def get_token_using_refresh_token(self, refresh_token):
    return self._get_oauth_token({
      'refresh_token': refresh_token,
      'grant_type': 'refresh_token',
      'redirect_uri': self.credentials.redirect_uri,
    })

  def _get_oauth_token(self, fields):
    body = {
      'client_id': self.credentials.client_id,
      'client_secret': self.credentials.client_secret,
    }
    body.update(fields)
    logger.info('Requesting token (grant_type: {})'.format(fields['grant_type']))
    return decode_response(self.post(TOKEN_PATH, data=body))

  # Resources

  def _get_resource(self, path, params=None):
    return decode_response(self.get(path, params=params, auth=AUTH_TYPE))

  def get_me(self):
    """
    Returns information about the authenticated user.
    """

    return self._get_resource('/me')

  def get_activities(self):
    return self._get_resource('/me/activities')

  def get_connections(self):
    """
    Returns the external profile connections (twitter, facebook, etc.) of
    the authenticated user.
    """

    return self._get_resource('/me/connections')

  def get_stream(self):
    """
    Returns recent tracks from users that the authenticated user follows.
    """

    return self._get_resource('/me/activities/tracks/affiliated')

  def get_tracks(self, params=None):
    return self._get_resource('/me/tracks', params)

  def get_playlists(self):
    return self._get_resource('/me/playlists')

  def get_favorites(self):
    return self._get_resource('/me/favorites')

  def get_track(self, track_id):
    return self._get_resource('/tracks/{}'.format(int(track_id)))

  def get_playlist(self, playlist_id):
    return self._get_resource('/playlists/{}'.format(int(playlist_id)))

  def get_track_stream_uri(self, track_id):
    """
    Returns the streaming URL for a track. The track's `stream_url` answers
    with a redirect, which is not followed; its `Location` is returned.
    """

    stream_url = self.get_track(track_id)['stream_url']
    response = self.get(stream_url, auth=AUTH_TYPE, allow_redirects=False)
    return response.headers.get('Location')

  def resolve_uri(self, uri):
    """
    Resolves a soundcloud.com URL and returns the API URL of the resource
    it points to, ie. the URL the `/resolve` endpoint redirects to.
    """

    response = self.get('/resolve', params={'url': uri}, auth=AUTH_TYPE)
    return response.url

  def resolve(self, uri):
    """
    Like #resolve_uri(), but returns the resource itself.

    The returned JSON payload contains the following keys amongst others:

    * kind (eg. track)
    * title
    * stream_url
    """

    return self._get_resource('/resolve', {'url': uri})

  def get_next_page(self, uri):
    """
    Retrieves the next page of a paginated collection, given the
    `next_href` of the previous page.
    """

    return self._get_resource(uri)
