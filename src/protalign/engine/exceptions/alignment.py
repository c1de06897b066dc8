class UnknownSymbolException(LookupError):
    def __init__(self, first: str, second: str, *args):
        self.first = first
        self.second = second
        super().__init__(f"No penalty registered for the pair ({first!r}, {second!r}).", *args)

class EmptyCandidateSetException(ValueError):
    def __init__(self, *args):
        super().__init__("Cannot select a best match from an empty collection of candidates.", *args)
