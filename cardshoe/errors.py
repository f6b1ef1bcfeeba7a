"""Exceptions raised by the shoe."""


class ShoeIntegrityError(RuntimeError):
    """
    The shoe's card distribution no longer matches its last build.

    Raised when a freshly built shoe has the wrong per-card counts or a
    shuffle changed the multiset. Either means the enumeration or the
    shuffle is broken, so the shoe must not keep dealing.
    """

    def __init__(self, message: str, expected: int, actual: int) -> None:
        super().__init__(f"{message} (expected {expected}, got {actual})")
        self.expected = expected
        self.actual = actual
