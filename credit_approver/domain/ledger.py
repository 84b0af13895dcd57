"""Per-session record of questionnaire answers"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from credit_approver.domain.models import Question

AFFIRMATIVE_ANSWERS = frozenset({"yes", "true"})


class AnswerLedger:
    """
    Maps question index to the raw answer the user gave.

    Entries are only ever inserted or overwritten. Any string is stored as-is;
    only affirmative answers earn points when scoring.
    """

    def __init__(self, answers: Optional[Dict[int, str]] = None):
        self._answers: Dict[int, str] = dict(answers or {})

    def record_answer(self, step: int, value: str) -> None:
        self._answers[step] = value

    def get(self, step: int, default: Optional[str] = None) -> Optional[str]:
        return self._answers.get(step, default)

    def answers(self) -> List[Tuple[int, str]]:
        """Recorded answers ordered by question index"""
        return sorted(self._answers.items())

    def score(self, questions: Sequence[Question]) -> int:
        """
        Sum the weights of every affirmatively answered question.

        Recomputed from the full ledger each call. Answers for indexes with no
        matching question count as weight 0.
        """
        total = 0
        for step, value in self._answers.items():
            if not is_affirmative(value):
                continue
            if 0 <= step < len(questions):
                total += questions[step].weight
        return total

    def copy(self) -> "AnswerLedger":
        return AnswerLedger(self._answers)

    def __contains__(self, step: object) -> bool:
        return step in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._answers))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnswerLedger):
            return NotImplemented
        return self._answers == other._answers

    def __repr__(self) -> str:
        return f"AnswerLedger({self._answers!r})"


def is_affirmative(value: object) -> bool:
    return isinstance(value, str) and value.lower() in AFFIRMATIVE_ANSWERS
