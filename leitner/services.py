import logging
from typing import List, Optional, Set, Union, Iterable

from .models import (
    Flashcard,
    AnswerDifficulty,
    PracticeRecord,
    BucketRange,
    ProgressStats,
    BucketMap,
    BucketSets,
)

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

# Review interval in days for buckets 0..4. Buckets past the end are never scheduled.
REVIEW_INTERVALS = [1, 4, 10, 30, 100]
MIN_BUCKET = 0
MAX_BUCKET = 4

TAG_HINT_PREFIX = "Try a card related to: "
FRONT_HINT_PREFIX = "First few characters: "
FRONT_HINT_LENGTH = 5


# --- Bucket representations ---

def to_bucket_sets(buckets: BucketMap) -> BucketSets:
    """
    Converts a bucket-number -> cards mapping into a list indexed by bucket number.

    Args:
        buckets (dict): Sparse mapping of bucket number to set of Flashcards.

    Returns:
        list: Sets of Flashcards of length max(bucket) + 1. Buckets missing
              from the mapping come back as empty sets. An empty mapping
              gives an empty list.
    """
    max_bucket = max(buckets.keys(), default=-1)
    return [set(buckets.get(i, ())) for i in range(max_bucket + 1)]


def to_bucket_map(bucket_sets: BucketSets) -> BucketMap:
    """Inverse of to_bucket_sets. Only non-empty buckets are kept."""
    return {i: set(cards) for i, cards in enumerate(bucket_sets) if cards}


def get_bucket_range(bucket_sets: BucketSets) -> Optional[BucketRange]:
    """
    Finds the lowest and highest buckets holding at least one card.

    Returns None when every bucket is empty (or there are no buckets).
    """
    occupied = [i for i, cards in enumerate(bucket_sets) if cards]
    if not occupied:
        return None
    return BucketRange(min_bucket=occupied[0], max_bucket=occupied[-1])


# --- Scheduling ---

def practice(bucket_sets: BucketSets, day: int) -> Set[Flashcard]:
    """
    Selects the cards to practice on `day` (counting from day 0).

    Bucket i is due whenever day is a multiple of REVIEW_INTERVALS[i], so
    bucket 0 is due every day and every bucket is due on day 0.
    """
    practice_cards = set()
    for index, interval in enumerate(REVIEW_INTERVALS):
        if index < len(bucket_sets) and day % interval == 0:
            practice_cards.update(bucket_sets[index])
    return practice_cards


def _find_bucket(buckets: BucketMap, card: Flashcard) -> int:
    for bucket, cards in buckets.items():
        if card in cards:
            return bucket
    # Unknown cards are treated as new
    return MIN_BUCKET


def next_bucket(current_bucket: int, difficulty: AnswerDifficulty) -> int:
    """Modified-Leitner transition for one practice trial."""
    if difficulty == AnswerDifficulty.WRONG:
        return MIN_BUCKET
    if difficulty == AnswerDifficulty.HARD:
        return max(MIN_BUCKET, current_bucket - 1)
    return min(MAX_BUCKET, current_bucket + 1)


def update(buckets: BucketMap, card: Flashcard, difficulty: AnswerDifficulty) -> BucketMap:
    """
    Moves a card to its next bucket after a practice trial.

    Args:
        buckets (dict): Sparse bucket mapping. Left untouched.
        card (Flashcard): The card that was practiced.
        difficulty (AnswerDifficulty): How the trial went.

    Returns:
        dict: A new mapping (with new sets) reflecting the move.
    """
    updated = {bucket: set(cards) for bucket, cards in buckets.items()}

    current_bucket = _find_bucket(updated, card)
    new_bucket = next_bucket(current_bucket, difficulty)

    if current_bucket in updated:
        updated[current_bucket].discard(card)
    updated.setdefault(new_bucket, set()).add(card)

    logging.debug(f"Moved '{card.front}' from bucket {current_bucket} to {new_bucket} ({difficulty.name})")
    return updated


# --- Hints & progress ---

def get_hint(card: Flashcard) -> str:
    """Hint text for the front of a card: own hint, then tags, then the first few characters."""
    if card.hint and card.hint.strip():
        return card.hint.strip()
    if card.tags:
        return TAG_HINT_PREFIX + ", ".join(card.tags)
    return f"{FRONT_HINT_PREFIX}{card.front[:FRONT_HINT_LENGTH]}..."


def compute_progress(
    buckets: Union[BucketMap, BucketSets],
    history: Optional[List[PracticeRecord]] = None,
) -> ProgressStats:
    """
    Counts cards overall and per bucket.

    Accepts either bucket representation. `history` is part of the signature
    for trend statistics and is not used yet.
    """
    bucket_sets = to_bucket_sets(buckets) if isinstance(buckets, dict) else buckets
    distribution = [len(cards) for cards in bucket_sets]
    return ProgressStats(total_cards=sum(distribution), bucket_distribution=distribution)


# --- Session ---

class PracticeSession:
    """In-memory study session over one deck."""

    def __init__(self, cards: Optional[Iterable[Flashcard]] = None, buckets: Optional[BucketMap] = None):
        """
        Args:
            cards (iterable): New cards, placed in bucket 0.
            buckets (dict): Existing bucket assignment (copied). Cards already
                            placed there keep their bucket.
        """
        self.buckets = {bucket: set(members) for bucket, members in (buckets or {}).items()}
        new_cards = [card for card in cards or () if not self.is_placed(card)]
        if new_cards or buckets is None:
            self.buckets.setdefault(MIN_BUCKET, set()).update(new_cards)
        self.history: List[PracticeRecord] = []
        self.study_queue: List[Flashcard] = []
        self.session_stats = {"reviewed": 0, "total_due": 0}
        self.day = None

    def start_day(self, day: int) -> int:
        """Prepares the study queue for `day`."""
        due = practice(to_bucket_sets(self.buckets), day)
        self.study_queue = sorted(due, key=lambda card: (card.front, card.back, card.hint or "", card.tags))

        self.session_stats["total_due"] = len(self.study_queue)
        self.session_stats["reviewed"] = 0
        self.day = day

        logging.info(f"Day {day}: {len(self.study_queue)} cards due for review.")
        return len(self.study_queue)

    def get_next_card(self) -> Optional[Flashcard]:
        if not self.study_queue:
            return None
        # Head of queue stays until it is reviewed
        return self.study_queue[0]

    def get_hint(self) -> Optional[str]:
        card = self.get_next_card()
        if card is None:
            return None
        return get_hint(card)

    def process_review(self, card: Flashcard, difficulty: AnswerDifficulty) -> bool:
        if card not in self.study_queue:
            logging.warning(f"Card '{card.front}' is not due in this session.")
            return False

        self.buckets = update(self.buckets, card, difficulty)
        self.history.append(PracticeRecord(card=card, difficulty=difficulty))
        self.study_queue.remove(card)

        self.session_stats["reviewed"] += 1
        logging.info(f"Reviewed '{card.front}' as {difficulty.name}. {len(self.study_queue)} left.")
        return True

    def is_placed(self, card: Flashcard) -> bool:
        return any(card in members for members in self.buckets.values())

    def add_card(self, card: Flashcard) -> bool:
        """Adds a new card to bucket 0. Cards already in a bucket are left where they are."""
        if self.is_placed(card):
            logging.warning(f"Card '{card.front}' is already in bucket {_find_bucket(self.buckets, card)}.")
            return False

        updated = {bucket: set(members) for bucket, members in self.buckets.items()}
        updated.setdefault(MIN_BUCKET, set()).add(card)
        self.buckets = updated
        return True

    def get_stats(self):
        progress = compute_progress(self.buckets, self.history)
        bucket_range = get_bucket_range(to_bucket_sets(self.buckets))
        return {
            "total_cards": progress.total_cards,
            "bucket_distribution": progress.bucket_distribution,
            "bucket_range": bucket_range.model_dump() if bucket_range else None,
            "reviewed": self.session_stats["reviewed"],
            "total_due": self.session_stats["total_due"],
            "day": self.day,
        }
