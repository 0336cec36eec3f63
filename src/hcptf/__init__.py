import logging
from importlib.metadata import PackageNotFoundError, version
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

try:
    __version__ = version("hcptf")
except PackageNotFoundError:
    __version__ = "0.0.0"

DEFAULT_ADDRESS = "https://app.terraform.io"
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_OUTPUT_FORMAT = "table"

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"
