from typing import List

from src.models.quiz_progress import RecordedAnswer


def percentage(correct: int, total: int) -> int:
    """round(correct / total * 100) с округлением половины вверх, 0 если ответов нет"""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def score_summary(answers: List[RecordedAnswer]) -> dict:
    """Итог попытки, всегда пересчитывается по списку ответов"""
    total = len(answers)
    correct = sum(1 for answer in answers if answer.is_correct)
    return {"correct": correct, "total": total, "percentage": percentage(correct, total)}


def remaining_lives(lives: int, is_correct: bool) -> int:
    if is_correct:
        return lives
    return max(0, lives - 1)
