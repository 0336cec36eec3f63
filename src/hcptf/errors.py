"""Exceptions raised by hcptf. The CLI layer is the only place these turn into user-facing text."""

from typing import Optional


class HcptfError(Exception):
    pass


class ApiRequestError(HcptfError):
    """The request could not be built, sent, or its body could not be read.

    A non-2xx status is not an error at this level; callers inspect the status themselves.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(HcptfError):
    pass


class ConfigError(HcptfError):
    pass
