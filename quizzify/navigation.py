"""
Screen navigation for the Quizzify app.

A finite-state machine over the app screens. User actions are fed in as
triggers; transitions that pass through the loading screen pause for a fixed
delay before landing on their target.
"""
import asyncio
import logging
import time
from collections import deque
from enum import Enum
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Tuple

from .models import Screen
from .quiz_session import QuizSession, UnknownCategoryError


class Trigger(Enum):
    """User actions that drive screen changes."""
    SUBMIT_LOGIN = "submit_login"
    GO_TO_REGISTER = "go_to_register"
    SUBMIT_REGISTRATION = "submit_registration"
    BACK_TO_LOGIN = "back_to_login"
    SELECT_CATEGORY = "select_category"
    OPEN_PROFILE = "open_profile"
    LOGOUT = "logout"
    QUIT_QUIZ = "quit_quiz"
    RETURN_HOME = "return_home"
    CLOSE_PROFILE = "close_profile"
    SYSTEM_BACK = "system_back"


# (from, trigger) -> (to, screen reached after the loading pause)
TRANSITIONS: Dict[Tuple[Screen, Trigger], Tuple[Screen, Optional[Screen]]] = {
    (Screen.LOGIN, Trigger.SUBMIT_LOGIN): (Screen.LOADING, Screen.MENU),
    (Screen.LOGIN, Trigger.GO_TO_REGISTER): (Screen.REGISTER, None),
    (Screen.REGISTER, Trigger.SUBMIT_REGISTRATION): (Screen.LOADING, Screen.MENU),
    (Screen.REGISTER, Trigger.BACK_TO_LOGIN): (Screen.LOGIN, None),
    (Screen.REGISTER, Trigger.SYSTEM_BACK): (Screen.LOGIN, None),
    (Screen.MENU, Trigger.SELECT_CATEGORY): (Screen.QUIZ, None),
    (Screen.MENU, Trigger.OPEN_PROFILE): (Screen.PROFILE, None),
    (Screen.MENU, Trigger.LOGOUT): (Screen.LOADING, Screen.LOGIN),
    (Screen.QUIZ, Trigger.QUIT_QUIZ): (Screen.MENU, None),
    (Screen.QUIZ, Trigger.RETURN_HOME): (Screen.MENU, None),
    (Screen.QUIZ, Trigger.SYSTEM_BACK): (Screen.MENU, None),
    (Screen.PROFILE, Trigger.CLOSE_PROFILE): (Screen.MENU, None),
    (Screen.PROFILE, Trigger.SYSTEM_BACK): (Screen.MENU, None),
}

# Back on these screens leaves the app instead of changing screen
EXIT_ON_BACK = frozenset({Screen.LOGIN, Screen.MENU})

CONFIRMABLE_TRIGGERS = frozenset({Trigger.QUIT_QUIZ, Trigger.LOGOUT})

DEFAULT_LOADING_DELAY = 1.5

# Most recent screens kept in NavigationController.history
HISTORY_LIMIT = 50

ScreenObserver = Callable[["NavigationController"], Any]


class NavigationController:
    """
    Holds the current screen and applies triggers to it.

    Triggers that are not allowed from the current screen are ignored, so
    fire() never raises. Selecting a category starts the quiz session and
    logging out resets it.
    """

    def __init__(
        self,
        session: QuizSession,
        loading_delay: float = DEFAULT_LOADING_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Initialize the navigation controller.

        Args:
            session: Quiz session started and reset by navigation
            loading_delay: Seconds spent on the loading screen
            sleep: Coroutine function used for the loading pause
        """
        self.logger = logging.getLogger(__name__)
        self.session = session
        self.loading_delay = loading_delay
        self._sleep = sleep

        self._screen = Screen.LOGIN
        self._pending_target: Optional[Screen] = None
        self._pending_confirmation: Optional[Trigger] = None
        self.exit_requested = False
        self.history: Deque[Screen] = deque([Screen.LOGIN], maxlen=HISTORY_LIMIT)
        self._observers: List[ScreenObserver] = []

    @property
    def current_screen(self) -> Screen:
        return self._screen

    @property
    def pending_target(self) -> Optional[Screen]:
        return self._pending_target

    @property
    def pending_confirmation(self) -> Optional[Trigger]:
        return self._pending_confirmation

    @property
    def is_loading(self) -> bool:
        return self._screen == Screen.LOADING and self._pending_target is not None

    def showing_result(self) -> bool:
        """True when the quiz screen is showing the final score."""
        return self._screen == Screen.QUIZ and self.session.is_finished()

    def can_fire(self, trigger: Trigger) -> bool:
        """
        Check whether a trigger would be applied from the current screen.

        Args:
            trigger: Trigger to check

        Returns:
            True if firing the trigger changes screen or requests exit
        """
        if self.is_loading:
            return False

        if trigger == Trigger.SYSTEM_BACK and self._screen in EXIT_ON_BACK:
            return True

        if (self._screen, trigger) not in TRANSITIONS:
            return False

        if trigger == Trigger.RETURN_HOME:
            return self.session.is_finished()

        return True

    def allowed_triggers(self) -> List[Trigger]:
        return [trigger for trigger in Trigger if self.can_fire(trigger)]

    def fire(self, trigger: Trigger, category: Optional[str] = None) -> Screen:
        """
        Apply a trigger to the current screen.

        Args:
            trigger: User action to apply
            category: Category name, required for SELECT_CATEGORY

        Returns:
            The screen after the trigger (LOADING for delayed transitions)
        """
        if not self.can_fire(trigger):
            self.logger.warning(
                f"Ignoring trigger {trigger.value} on screen {self._screen.value}",
                extra={
                    'event_type': 'navigation_trigger_ignored',
                    'screen': self._screen.value,
                    'trigger': trigger.value,
                    'loading': self.is_loading
                }
            )
            return self._screen

        if trigger == Trigger.SYSTEM_BACK and self._screen in EXIT_ON_BACK:
            self.exit_requested = True
            self._pending_confirmation = None
            self.logger.info(
                f"Exit requested from screen {self._screen.value}",
                extra={'event_type': 'navigation_exit', 'screen': self._screen.value}
            )
            self._notify()
            return self._screen

        if trigger == Trigger.SELECT_CATEGORY:
            if category is None:
                self.logger.warning("SELECT_CATEGORY fired without a category")
                return self._screen
            try:
                self.session.start(category)
            except UnknownCategoryError as e:
                self.logger.warning(f"Category selection rejected: {e}")
                return self._screen

        if trigger == Trigger.LOGOUT:
            self.session.reset()

        target, after_loading = TRANSITIONS[(self._screen, trigger)]
        self._pending_confirmation = None
        self._pending_target = after_loading
        self._set_screen(target, trigger)
        return self._screen

    async def settle(self) -> Screen:
        """
        Finish a pending loading pause.

        Waits for the loading delay, then moves to the screen the loading
        transition was heading for. Does nothing if no pause is pending.

        Returns:
            The screen after the pause
        """
        if not self.is_loading:
            return self._screen

        await self._sleep(self.loading_delay)

        target = self._pending_target
        self._pending_target = None
        self._set_screen(target, None)
        return self._screen

    def request_confirmation(self, trigger: Trigger) -> bool:
        """
        Arm a confirmation prompt for a quit or logout.

        Args:
            trigger: QUIT_QUIZ or LOGOUT

        Returns:
            True if the prompt is now pending
        """
        if trigger not in CONFIRMABLE_TRIGGERS or not self.can_fire(trigger):
            return False
        self._pending_confirmation = trigger
        self._notify()
        return True

    def confirm(self) -> Screen:
        """Fire the trigger behind the pending confirmation prompt."""
        trigger = self._pending_confirmation
        if trigger is None:
            return self._screen
        self._pending_confirmation = None
        return self.fire(trigger)

    def dismiss(self) -> None:
        if self._pending_confirmation is not None:
            self._pending_confirmation = None
            self._notify()

    def subscribe(self, observer: ScreenObserver) -> None:
        """Register a callback invoked with the controller after every change."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: ScreenObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _set_screen(self, screen: Screen, trigger: Optional[Trigger]) -> None:
        previous = self._screen
        self._screen = screen
        self.history.append(screen)
        self.logger.info(
            f"Screen {previous.value} -> {screen.value}",
            extra={
                'event_type': 'screen_changed',
                'from_screen': previous.value,
                'to_screen': screen.value,
                'trigger': trigger.value if trigger else None,
                'pending_target': self._pending_target.value if self._pending_target else None,
                'timestamp': time.time()
            }
        )
        self._notify()

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception as e:
                self.logger.error(f"Screen observer {observer!r} failed: {e}", exc_info=True)
