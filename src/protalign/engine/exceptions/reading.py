class PenaltyTableFormatException(ValueError):
    def __init__(self, line_number: int, reason: str, *args):
        self.line_number = line_number
        super().__init__(f"Malformed penalty table at line {line_number}: {reason}", *args)

class NonIntegerScoreException(ValueError):
    def __init__(self, first: str, second: str, score: float, matrix_name: str = "substitution matrix", *args):
        self.first = first
        self.second = second
        self.score = score
        super().__init__(f"The {matrix_name} scores the pair ({first!r}, {second!r}) as {score}, which is not an integer.", *args)
