
class Error(Exception):
  pass


class ConfigurationError(Error, ValueError):
  """
  Raised when a required option such as the *client_id* is missing or the
  configuration can not be loaded.
  """
