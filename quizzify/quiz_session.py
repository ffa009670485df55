"""
Quiz session state for the Quizzify app.
Tracks the active category, the position in its questions and the score.
"""
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .catalog import QuizCatalog
from .models import Question, QuizResult


class SessionState(Enum):
    """Enumeration of possible quiz session states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class AnswerOutcome(Enum):
    """Result of submitting an answer."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    INACTIVE = "inactive"


class QuizSessionError(Exception):
    """Base exception for quiz session errors."""
    pass


class UnknownCategoryError(QuizSessionError):
    """Raised in strict mode when starting a category the catalog does not have."""
    pass


SessionObserver = Callable[["QuizSession"], Any]
ResultListener = Callable[[QuizResult], Any]


class QuizSession:
    """
    Mutable state of one quiz attempt.

    The session reads its questions from a catalog on start(), then walks
    them in order. Every answer advances the position by one; a correct
    answer also adds one to the score. Once the position reaches the number
    of questions the session is finished until the next start().
    """

    def __init__(self, catalog: QuizCatalog, strict_categories: bool = False):
        """
        Initialize the quiz session.

        Args:
            catalog: Read-only provider of questions per category
            strict_categories: Raise UnknownCategoryError for unknown categories
                instead of starting an empty quiz
        """
        self.logger = logging.getLogger(__name__)
        self.catalog = catalog
        self.strict_categories = strict_categories

        self._category: Optional[str] = None
        self._questions: Tuple[Question, ...] = ()
        self._position = 0
        self._score = 0
        self._started = False

        self._observers: List[SessionObserver] = []
        self._result_listeners: List[ResultListener] = []

    def start(self, category: str) -> None:
        """
        Start (or restart) a quiz for the given category.

        Args:
            category: Category name to load from the catalog

        Raises:
            UnknownCategoryError: If strict_categories is set and the category is unknown
        """
        if not self.catalog.has_category(category):
            if self.strict_categories:
                raise UnknownCategoryError(f"Quiz category '{category}' not found")
            self.logger.warning(
                f"Unknown quiz category '{category}', starting an empty quiz",
                extra={'event_type': 'session_unknown_category', 'category': category}
            )

        self._category = category
        self._questions = self.catalog.questions_for(category)
        self._position = 0
        self._score = 0
        self._started = True

        self.logger.info(
            f"Started quiz '{category}' with {len(self._questions)} questions",
            extra={
                'event_type': 'session_started',
                'category': category,
                'total_questions': len(self._questions),
                'timestamp': time.time()
            }
        )
        self._notify()

    def reset(self) -> None:
        """Drop the current attempt and go back to the not-started state."""
        self._category = None
        self._questions = ()
        self._position = 0
        self._score = 0
        self._started = False
        self.logger.debug("Quiz session reset")
        self._notify()

    def current_question(self) -> Optional[Question]:
        """
        Get the question at the current position.

        Returns:
            Current Question, or None if the quiz is finished or was never started
        """
        if self._position >= len(self._questions):
            return None
        return self._questions[self._position]

    def submit_answer(self, selected_index: int) -> AnswerOutcome:
        """
        Submit an answer for the current question.

        Args:
            selected_index: Index of the option chosen by the user

        Returns:
            CORRECT or INCORRECT when the answer was recorded, INACTIVE when
            there was no current question and nothing changed
        """
        question = self.current_question()
        if question is None:
            self.logger.debug(
                "Answer submitted with no active question",
                extra={'event_type': 'answer_inactive', 'category': self._category}
            )
            return AnswerOutcome.INACTIVE

        if question.is_correct(selected_index):
            self._score += 1
            outcome = AnswerOutcome.CORRECT
        else:
            outcome = AnswerOutcome.INCORRECT

        self._position += 1

        self.logger.debug(
            f"Answer {selected_index} for question {self._position}/{len(self._questions)} "
            f"was {outcome.value}, score {self._score}"
        )

        self._notify()

        if self._position >= len(self._questions):
            self._on_finished()

        return outcome

    def current_score(self) -> int:
        return self._score

    @property
    def state(self) -> SessionState:
        if not self._started:
            return SessionState.NOT_STARTED
        if self._position >= len(self._questions):
            return SessionState.FINISHED
        return SessionState.IN_PROGRESS

    @property
    def active_category(self) -> Optional[str]:
        return self._category

    @property
    def active_questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def current_position(self) -> int:
        return self._position

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    def is_finished(self) -> bool:
        return self.state == SessionState.FINISHED

    def get_progress(self) -> Dict[str, Any]:
        """
        Get progress information for the session.

        Returns:
            Dictionary with category, 1-based question number, totals, score and state
        """
        return {
            'category': self._category,
            'current_question': min(self._position + 1, len(self._questions)),
            'total_questions': len(self._questions),
            'score': self._score,
            'state': self.state.value
        }

    def get_result(self) -> Optional[QuizResult]:
        """Final result, available once the session is finished."""
        if not self.is_finished():
            return None
        return QuizResult(
            category=self._category or "",
            score=self._score,
            total=len(self._questions)
        )

    def subscribe(self, observer: SessionObserver) -> None:
        """Register a callback invoked with the session after every change."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def on_finished(self, listener: ResultListener) -> None:
        """Register a callback invoked with the QuizResult when an answer finishes the quiz."""
        self._result_listeners.append(listener)

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception as e:
                self.logger.error(f"Session observer {observer!r} failed: {e}", exc_info=True)

    def _on_finished(self) -> None:
        result = self.get_result()
        self.logger.info(
            f"Quiz '{self._category}' finished with score {self._score}/{len(self._questions)}",
            extra={
                'event_type': 'session_finished',
                'category': self._category,
                'score': self._score,
                'total_questions': len(self._questions),
                'timestamp': time.time()
            }
        )
        for listener in list(self._result_listeners):
            try:
                listener(result)
            except Exception as e:
                self.logger.error(f"Result listener {listener!r} failed: {e}", exc_info=True)
