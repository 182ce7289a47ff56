class InvalidRange(ValueError):
    """Raised when an interval's start is not strictly before its end."""

    def __init__(self, start: int, end: int):
        self.start: int = start
        self.end: int = end
        super().__init__(
            f"Interval start ({start}) must be before end ({end}).\n"
            f"Zero-length and reversed intervals are not representable.\n"
            f"Hint: Check the argument order, or use "
            f"Interval.from_instants() if the inputs carry sub-day precision"
        )


class IndexOutOfRange(IndexError):
    """Raised when a positional sequence operation gets an invalid index."""

    def __init__(self, index: int, length: int):
        self.index: int = index
        self.length: int = length
        super().__init__(
            f"Index {index} is out of bounds for sequence of length {length}"
        )
