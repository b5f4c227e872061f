"""Exception hierarchy for diagram generation"""


class LollipopsError(Exception):
    """Base class for all lollipops errors"""


class ParseError(LollipopsError, ValueError):
    """A mutation token could not be parsed"""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid mutation '{token}': {reason}")


class DataError(LollipopsError, ValueError):
    """Feature data is empty, malformed or has a non-positive length"""


class RenderError(LollipopsError):
    """The rendered diagram could not be written to its destination"""


class FontUnavailable(LollipopsError):
    """No usable TrueType font could be loaded

    Never fatal: callers fall back to estimated text widths.
    """
