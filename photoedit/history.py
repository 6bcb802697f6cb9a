from typing import Iterable, Iterator, List, Tuple

from .models import HistoryTurn


class HistoryLog:
    """Append-only, insertion-ordered record of conversation turns.

    Turns are frozen once appended. The only way to remove entries is
    :meth:`clear`, which empties the whole log. Role alternation is not
    enforced.
    """

    def __init__(self, turns: Iterable[HistoryTurn] = ()):
        self._turns: List[HistoryTurn] = []
        self.extend(turns)

    def append(self, turn: HistoryTurn) -> None:
        if not isinstance(turn, HistoryTurn):
            raise TypeError(f"Expected HistoryTurn, got {type(turn)}")
        self._turns.append(turn)

    def extend(self, turns: Iterable[HistoryTurn]) -> None:
        for turn in turns:
            self.append(turn)

    def clear(self) -> None:
        self._turns = []

    @property
    def turns(self) -> Tuple[HistoryTurn, ...]:
        return tuple(self._turns)

    def to_payload(self) -> List[dict]:
        return [turn.model_dump(mode="json", exclude_none=True) for turn in self._turns]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[HistoryTurn]:
        return iter(tuple(self._turns))

    def __getitem__(self, index):
        return self._turns[index]

    def __bool__(self) -> bool:
        return bool(self._turns)

    def __repr__(self) -> str:
        return f"HistoryLog({len(self._turns)} turns)"
