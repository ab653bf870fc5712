"""Exceptions raised by the maze builder."""


class MazeBuilderError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MazeBuilderError):
    """Invalid bounds profile or settings value."""


class TransportFailure(MazeBuilderError):
    """The generator could not be reached or did not answer."""


class GeneratorTimeout(TransportFailure):
    def __init__(self, timeout_s: float) -> None:
        super().__init__(f"timeout after {timeout_s:g} s")
        self.timeout_s = timeout_s


class GeneratorCancelled(TransportFailure):
    def __init__(self) -> None:
        super().__init__("request cancelled")
