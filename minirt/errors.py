"""Exceptions raised while reading and rendering a scene."""


class MiniRTError(Exception):
    """Base class of every error raised by the renderer."""


class SceneError(MiniRTError):
    """The scene description or the command line given by the user is invalid."""

    def __init__(self, message):
        self.message = message.rstrip("\n")
        super().__init__(self.message)


class DivisorError(MiniRTError, ZeroDivisionError):
    """A vector was divided by zero."""

    def __init__(self, message="Divider is 0"):
        super().__init__(message)