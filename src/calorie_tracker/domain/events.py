"""User actions dispatched into the view controller."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SelectDay:
    day: date


@dataclass(frozen=True)
class PreviousMonth:
    pass


@dataclass(frozen=True)
class NextMonth:
    pass


@dataclass(frozen=True)
class NameTyped:
    text: str


@dataclass(frozen=True)
class CaloriesTyped:
    text: str


@dataclass(frozen=True)
class MultiplierTyped:
    text: str


@dataclass(frozen=True)
class SuggestionNext:
    pass


@dataclass(frozen=True)
class SuggestionPrevious:
    pass


@dataclass(frozen=True)
class SuggestionCommit:
    pass


@dataclass(frozen=True)
class SuggestionsClosed:
    pass


@dataclass(frozen=True)
class ConfEdited:
    key: str
    text: str


@dataclass(frozen=True)
class EditItem:
    """Change some fields of an item; ``None`` leaves a field unchanged."""

    item_id: int
    name: str | None = None
    calories: str | None = None
    multiplier: str | None = None


@dataclass(frozen=True)
class DeleteItem:
    item_id: int


@dataclass(frozen=True)
class DuplicateItem:
    """Add one more serving to an item."""

    item_id: int


@dataclass(frozen=True)
class WeightTyped:
    text: str


@dataclass(frozen=True)
class RecordWeight:
    pass


@dataclass(frozen=True)
class Reload:
    pass


Event = (
    SelectDay
    | PreviousMonth
    | NextMonth
    | NameTyped
    | CaloriesTyped
    | MultiplierTyped
    | SuggestionNext
    | SuggestionPrevious
    | SuggestionCommit
    | SuggestionsClosed
    | ConfEdited
    | EditItem
    | DeleteItem
    | DuplicateItem
    | WeightTyped
    | RecordWeight
    | Reload
)
