"""Exceptions raised by the trail engine and its rendering boundary."""


class AttractorError(Exception):
    """Base class for all engine errors."""


class ContextUnavailableError(AttractorError):
    """The surface handed to the renderer carries no OpenGL context."""


class ShaderBuildError(AttractorError):
    """Shader compilation or program linking failed.

    Attributes:
        log: Info log text reported by the driver
    """

    def __init__(self, stage: str, log: str):
        self.stage = stage
        self.log = log
        super().__init__(f"{stage} failed: {log}")


class AllocationError(AttractorError, MemoryError):
    """A capacity operation could not allocate storage; prior state is intact."""
