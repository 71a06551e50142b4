from leitner.models import Flashcard, AnswerDifficulty, PracticeRecord, ProgressStats
from pydantic import ValidationError
import pytest

def test_flashcard_defaults():
    card = Flashcard(front="Hello", back="World")
    assert card.hint is None
    assert card.tags == ()

def test_flashcard_tags_keep_order():
    card = Flashcard(front="E = mc²", back="Mass-energy equivalence", tags=["physics", "relativity"])
    assert card.tags == ("physics", "relativity")

def test_flashcard_is_frozen():
    card = Flashcard(front="Hello", back="World")
    with pytest.raises(ValidationError):
        card.front = "Goodbye"

def test_flashcard_requires_text():
    with pytest.raises(ValidationError):
        Flashcard(front="Hello")

def test_flashcards_with_same_fields_are_distinct():
    card1 = Flashcard(front="Hello", back="World", hint="Test")
    card2 = Flashcard(front="Hello", back="World", hint="Test")
    assert card1 == card1
    assert card1 != card2
    assert len({card1, card2}) == 2

def test_practice_record_keeps_card_instance():
    card = Flashcard(front="Hello", back="World")
    record = PracticeRecord(card=card, difficulty=AnswerDifficulty.HARD)
    assert record.card is card
    assert record.difficulty is AnswerDifficulty.HARD

def test_practice_record_rejects_unknown_difficulty():
    card = Flashcard(front="Hello", back="World")
    with pytest.raises(ValidationError):
        PracticeRecord(card=card, difficulty="Impossible")

def test_progress_stats_dump():
    stats = ProgressStats(total_cards=2, bucket_distribution=[1, 1, 0])
    assert stats.model_dump() == {"total_cards": 2, "bucket_distribution": [1, 1, 0]}
