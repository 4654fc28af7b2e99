"""Exceptions raised while reading netlists and generating headers."""


class NetlistError(Exception):
    """Base class for every error raised by pinout."""

    pass


class StructureError(NetlistError):
    """Raised when a required section is missing or has the wrong shape."""

    pass


class UnknownPinTypeError(NetlistError):
    """Raised when a library pin declares an electrical type we do not know."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown electrical pin type '{value}'")


class MissingNetError(NetlistError):
    """Raised when a declared pin of a placed part has no net entry."""

    def __init__(self, node):
        self.node = node
        super().__init__(
            f"Pin {node.pin} of component {node.ref} is not connected to any net"
        )


class NetlistBuildError(NetlistError):
    """Raised when one phase of building a netlist fails.

    The original error is available as ``__cause__``.
    """

    def __init__(self, phase: str, message: str):
        self.phase = phase
        super().__init__(message)


class GenerationError(NetlistError):
    """Raised when a header cannot be generated for a component."""

    pass
