from dataclasses import dataclass

@dataclass(frozen=True)
class SequenceRecord:
    description: str
    sequence: str
