from enum import Enum
from typing import Optional


class AlgorithmId(Enum):
    BALANCED = "balanced"
    FIRST_CHOICE_ONLY = "first-choice-only"
    RANDOM = "random"
    ROUND_ROBIN = "round-robin"
    PREFERENCE_FIRST = "preference-first"
    SIMULATED_ANNEALING = "simulated-annealing"
    GENETIC = "genetic"

    @staticmethod
    def value_of(value: str) -> 'AlgorithmId':
        for algorithm in AlgorithmId:
            if algorithm.value == value:
                return algorithm
        raise AlgorithmIdError(f"Invalid algorithm id: {value}")

    @staticmethod
    def find(value: Optional[str]) -> Optional['AlgorithmId']:
        if value is None:
            return None
        try:
            return AlgorithmId.value_of(value)
        except AlgorithmIdError:
            return None

    def as_str(self) -> str:
        return self.value

    def label(self) -> str:
        return _LABELS[self]

    def is_slow(self) -> bool:
        return self in (AlgorithmId.SIMULATED_ANNEALING, AlgorithmId.GENETIC)


_LABELS = {
    AlgorithmId.BALANCED: "Balanced",
    AlgorithmId.FIRST_CHOICE_ONLY: "First Choice Only",
    AlgorithmId.RANDOM: "Random Shuffle",
    AlgorithmId.ROUND_ROBIN: "Round Robin",
    AlgorithmId.PREFERENCE_FIRST: "Preference-First",
    AlgorithmId.SIMULATED_ANNEALING: "Simulated Annealing",
    AlgorithmId.GENETIC: "Genetic Algorithm",
}


class AlgorithmIdError(Exception):
    """
    Exception raised when the algorithm id is unknown.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"AlgorithmIdError: {self.message}"
