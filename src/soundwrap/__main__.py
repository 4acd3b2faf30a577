
from .client import Client
from .errors import ConfigurationError

import argparse
import io
import json
import logging
import requests
import sys

logger = logging.getLogger('soundwrap.main')

#: Commands that take no argument, mapped to the client method they call.
simple_commands = {
  'me': 'get_me',
  'activities': 'get_activities',
  'connections': 'get_connections',
  'stream': 'get_stream',
  'tracks': 'get_tracks',
  'playlists': 'get_playlists',
  'favorites': 'get_favorites',
}

#: Commands that take a single argument.
arg_commands = {
  'track': 'get_track',
  'playlist': 'get_playlist',
  'stream-uri': 'get_track_stream_uri',
  'resolve': 'resolve_uri',
  'next': 'get_next_page',
}


def load_config(path):
  try:
    with open(path) as fp:
      return json.load(fp)
  except (OSError, ValueError) as exc:
    raise ConfigurationError('Unable to load config {!r}: {}'.format(path, exc))


def output(data, fp=None):
  fp = fp or sys.stdout
  if isinstance(data, io.BytesIO):
    fp.flush()
    getattr(fp, 'buffer', fp).write(data.getvalue())
  elif isinstance(data, str):
    print(data, file=fp)
  else:
    print(json.dumps(data, indent=2), file=fp)


def main(argv=None):
  commands = ['auth-uri', 'login'] + list(simple_commands) + list(arg_commands)
  parser = argparse.ArgumentParser(prog='soundwrap')
  parser.add_argument('command', choices=commands)
  parser.add_argument('arg', nargs='?')
  parser.add_argument('-c', '--config', default='soundwrap.json')
  parser.add_argument('-v', '--verbose', action='store_true')
  parser.add_argument('--token', help='OAuth token, overrides the config.')
  args = parser.parse_args(argv)

  loglevel = logging.INFO if args.verbose else logging.WARNING
  logging.basicConfig(format='[%(levelname)s %(name)s %(asctime)s]: %(message)s', level=loglevel)

  try:
    config = load_config(args.config)
    if not isinstance(config, dict):
      raise ConfigurationError('Expected a JSON object in {!r}'.format(args.config))
    username = config.pop('username', None)
    password = config.pop('password', None)
    client = Client.from_config(config)
  except ConfigurationError as exc:
    parser.error(str(exc))

  if args.token:
    client.oauth_token = args.token

  if args.command in arg_commands and not args.arg:
    parser.error('command {!r} requires an argument'.format(args.command))
  if args.command in ('track', 'playlist', 'stream-uri') and not args.arg.isdigit():
    parser.error('expected a numeric ID, got {!r}'.format(args.arg))
  if args.command == 'login' and not (username and password):
    parser.error('login requires "username" and "password" in the config')

  try:
    if args.command == 'auth-uri':
      result = client.get_token_auth_uri()
    elif args.command == 'login':
      result = client.login(username, password)
    elif args.command in simple_commands:
      result = getattr(client, simple_commands[args.command])()
    else:
      result = getattr(client, arg_commands[args.command])(args.arg)
  except requests.RequestException as exc:
    logger.error('Request failed: {}'.format(exc))
    return 1
  finally:
    client.close()

  output(result)
  return 0


if __name__ == '__main__':
  sys.exit(main())
