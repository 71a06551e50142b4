from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Set, Tuple

class Flashcard(BaseModel):
    model_config = ConfigDict(frozen=True)

    front: str
    back: str
    hint: Optional[str] = None
    tags: Tuple[str, ...] = ()

    # Cards are keyed by instance: two cards with the same text are still two cards.
    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

class AnswerDifficulty(Enum):
    WRONG = 0
    HARD = 1
    EASY = 2

class PracticeRecord(BaseModel):
    card: Flashcard
    difficulty: AnswerDifficulty

class BucketRange(BaseModel):
    min_bucket: int
    max_bucket: int

class ProgressStats(BaseModel):
    total_cards: int
    bucket_distribution: List[int]

# bucket number -> cards in that bucket
BucketMap = Dict[int, Set[Flashcard]]
# index i holds bucket i, gaps are empty sets
BucketSets = List[Set[Flashcard]]
