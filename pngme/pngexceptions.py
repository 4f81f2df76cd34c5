class PngException(Exception):
    """Base class for every error raised by pngme."""
    def __init__(self, txt):
        super(PngException, self).__init__(txt)


class FormatError(PngException):
    """Raised when bytes do not follow the PNG chunk framing."""
    def __init__(self, reason):
        self.reason = reason
        super(FormatError, self).__init__(reason)


class NotFoundError(PngException):
    """Raised when a png has no chunk of the requested type."""
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super(NotFoundError, self).__init__("no chunk of type {}".format(chunk_type))


class PngIOError(PngException):
    """Raised when a png can't be read from or written to its location."""
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super(PngIOError, self).__init__("{}: {}".format(path, cause))
