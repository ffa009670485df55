"""
Core data models for the Quizzify quiz app.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Question:
    """Represents a single multiple-choice quiz question."""
    text: str
    options: Tuple[str, ...]
    correct_option_index: int

    def __post_init__(self):
        # Lists from JSON or callers are normalised to an immutable tuple
        object.__setattr__(self, 'options', tuple(self.options))

        if len(self.options) < 2:
            raise ValueError(f"Question '{self.text}' needs at least 2 options, got {len(self.options)}")

        if not isinstance(self.correct_option_index, int) or isinstance(self.correct_option_index, bool):
            raise ValueError(f"Correct option index must be an integer, got {type(self.correct_option_index).__name__}")

        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"Correct option index {self.correct_option_index} out of range "
                f"for {len(self.options)} options"
            )

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]

    def is_correct(self, selected_index: int) -> bool:
        return selected_index == self.correct_option_index


class Screen(Enum):
    """Enumeration of the app screens."""
    LOGIN = "login"
    REGISTER = "register"
    MENU = "menu"
    QUIZ = "quiz"
    PROFILE = "profile"
    LOADING = "loading"


@dataclass(frozen=True)
class QuizResult:
    """Final result of one finished quiz attempt."""
    category: str
    score: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.score * 100 / self.total)

    @property
    def summary(self) -> str:
        return f"{self.percentage}%"


@dataclass
class UserProfile:
    """Profile data shown on the profile screen and in the menu drawer."""
    display_name: str = "John Doe"
    handle: str = "@JustMeHopeless"
    email: Optional[str] = None
    courses_enrolled: int = 3
    history: List[QuizResult] = field(default_factory=list)

    @property
    def quizzes_done(self) -> int:
        return len(self.history)


@dataclass
class AppSettings:
    """Configuration settings for app instances."""
    loading_delay: float = 1.5
    catalog_directory: Optional[str] = None
    strict_categories: bool = False
    view_timeout: int = 600
