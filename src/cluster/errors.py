"""Errors raised by the clustering engine."""


class ClusterAssertionError(AssertionError):
    """
    A configuration contract was violated.

    Raised instead of skipping data: the caller wired the clustering engine
    to something it cannot handle, e.g. non-point geometries without a
    custom geometry function.
    """

    def __init__(self, code: int, message: str):
        super().__init__(f"Assertion failed (code {code}): {message}")
        self.code = code
        self.message = message


GEOMETRY_NOT_POINT = 10
