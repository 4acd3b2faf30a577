
__version__ = '1.0.0'

USER_AGENT = 'soundwrap/{} (+https://github.com/soundwrap/soundwrap)'.format(__version__)

from .errors import Error, ConfigurationError
from .auth import AUTH_TYPE, SoundCloudAuth
from .client import Client, decode_response
