
"""
Authentication for requests to the SoundCloud API. Every request that is
tagged with the #AUTH_TYPE marker is signed with either the OAuth token or,
if there is none, the application's client ID.
"""

from .errors import ConfigurationError

import logging
import requests.auth
import urllib.parse

logger = logging.getLogger(__name__)

#: Pass this as the *auth* argument of a #Client request to have it signed.
AUTH_TYPE = 'soundcloud'


class SoundCloudAuth(requests.auth.AuthBase):
  """
  Holds the application credentials and the optional OAuth token. The token
  may be set or replaced at any time, eg. after a successful login.

  :param client_id: The client ID of your registered application (required).
  :param client_secret: The client secret, needed for token exchange.
  :param redirect_uri: The redirect URI registered for the application.
  :param oauth_token: An access token to authenticate as a user.
  """

  options = ('client_id', 'client_secret', 'redirect_uri', 'oauth_token')

  def __init__(self, client_id=None, client_secret=None, redirect_uri=None, oauth_token=None):
    if not client_id:
      raise ConfigurationError('Missing required option: client_id')
    self.client_id = client_id
    self.client_secret = client_secret
    self.redirect_uri = redirect_uri
    self.oauth_token = oauth_token

  def __repr__(self):
    return '<SoundCloudAuth client_id={!r} has_token={}>'.format(
      self.client_id, self.oauth_token is not None)

  @classmethod
  def from_config(cls, config):
    """
    Creates a #SoundCloudAuth from a key/value mapping. Keys that are not
    credential options are ignored.
    """

    unknown = set(config) - set(cls.options)
    if unknown:
      logger.warning('Ignoring unknown credential options: {}'.format(
        ', '.join(sorted(unknown))))
    return cls(**{k: config[k] for k in cls.options if k in config})

  def resolve(self, auth):
    """
    Returns this object if *auth* is the #AUTH_TYPE marker. Any other string
    is treated as no authentication, everything else (eg. a #requests.auth.AuthBase
    or a username/password tuple) is returned unchanged. Requests that are not
    tagged are never signed.
    """

    if isinstance(auth, str):
      return self if auth == AUTH_TYPE else None
    return auth

  def __call__(self, request):
    if self.oauth_token is not None:
      name, value, other = 'oauth_token', self.oauth_token, 'client_id'
    else:
      name, value, other = 'client_id', self.client_id, 'oauth_token'
    request.url = set_query_param(request.url, name, value, drop=(other,))
    request.signed_by = self
    return request


def set_query_param(url, name, value, drop=()):
  """
  Sets the query parameter *name* to *value* in *url*, replacing any
  existing occurrences. Parameters listed in *drop* are removed.
  """

  parts = urllib.parse.urlsplit(url)
  query = [(k, v) for k, v in urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
           if k != name and k not in drop]
  query.append((name, value))
  return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))
