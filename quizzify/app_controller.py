"""
App controller for the Quizzify bot.
Keeps one app instance (session, navigation, profile) per Discord user.
"""
import logging
import time
from datetime import datetime
from typing import Dict, Optional, Any, List

from .catalog import QuizCatalog
from .config_manager import ConfigManager
from .models import QuizResult, UserProfile
from .navigation import NavigationController
from .quiz_session import QuizSession


class AppControllerError(Exception):
    """Base exception for app controller errors."""
    pass


class AppNotFoundError(AppControllerError):
    """Raised when operating on a user that has no open app."""
    pass


class QuizzifyApp:
    """One user's app: quiz session, screen navigation and profile."""

    def __init__(
        self,
        user_id: int,
        catalog: QuizCatalog,
        loading_delay: float = 1.5,
        strict_categories: bool = False,
        profile: Optional[UserProfile] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.user_id = user_id
        self.catalog = catalog
        self.session = QuizSession(catalog, strict_categories=strict_categories)
        self.navigation = NavigationController(self.session, loading_delay=loading_delay)
        self.profile = profile or UserProfile()
        self.opened_at = datetime.now()
        # Discord view currently attached to this app, replaced on every /quizzify
        self.view: Optional[Any] = None

        self.session.on_finished(self._record_result)

    def _record_result(self, result: QuizResult) -> None:
        self.profile.history.append(result)
        self.logger.info(
            f"Recorded result {result.summary} in '{result.category}' for user {self.user_id}",
            extra={
                'event_type': 'result_recorded',
                'user_id': self.user_id,
                'category': result.category,
                'score': result.score,
                'total': result.total,
                'timestamp': time.time()
            }
        )

    def get_status(self) -> Dict[str, Any]:
        """
        Get status information for the app.

        Returns:
            Dictionary with screen, session progress and profile counters
        """
        return {
            'user_id': self.user_id,
            'screen': self.navigation.current_screen.value,
            'pending_confirmation': (
                self.navigation.pending_confirmation.value
                if self.navigation.pending_confirmation else None
            ),
            'exit_requested': self.navigation.exit_requested,
            'session': self.session.get_progress(),
            'quizzes_done': self.profile.quizzes_done,
            'opened_at': self.opened_at
        }


class AppController:
    """
    Registry of open app instances.

    Each Discord user has at most one app. Apps share the catalog and take
    their settings from the config manager when they are opened.
    """

    def __init__(self, catalog: QuizCatalog, config_manager: ConfigManager):
        """
        Initialize the app controller.

        Args:
            catalog: Catalog shared by every app
            config_manager: Instance for managing configuration
        """
        self.logger = logging.getLogger(__name__)
        self.catalog = catalog
        self.config_manager = config_manager
        self._apps: Dict[int, QuizzifyApp] = {}

        self.logger.info(f"AppController initialized with {len(catalog)} categories")

    def open_app(self, user_id: int) -> QuizzifyApp:
        """
        Get the user's app, creating it if needed.

        An app whose navigation requested exit is replaced by a fresh one.

        Args:
            user_id: Discord user identifier

        Returns:
            The user's QuizzifyApp
        """
        app = self._apps.get(user_id)
        if app is not None and not app.navigation.exit_requested:
            return app

        settings = self.config_manager.get_app_settings()
        profile = app.profile if app is not None else None
        app = QuizzifyApp(
            user_id,
            self.catalog,
            loading_delay=settings.loading_delay,
            strict_categories=settings.strict_categories,
            profile=profile
        )
        self._apps[user_id] = app

        self.logger.info(
            f"Opened app for user {user_id}",
            extra={'event_type': 'app_opened', 'user_id': user_id, 'timestamp': time.time()}
        )
        return app

    def get_app(self, user_id: int) -> Optional[QuizzifyApp]:
        return self._apps.get(user_id)

    def require_app(self, user_id: int) -> QuizzifyApp:
        """
        Get the user's app or fail.

        Raises:
            AppNotFoundError: If the user has no open app
        """
        app = self._apps.get(user_id)
        if app is None:
            raise AppNotFoundError(f"No open app for user {user_id}")
        return app

    def has_app(self, user_id: int) -> bool:
        return user_id in self._apps

    def close_app(self, user_id: int) -> bool:
        """
        Close the user's app.

        Args:
            user_id: Discord user identifier

        Returns:
            True if an app was closed, False if none was open
        """
        if user_id not in self._apps:
            self.logger.warning(
                f"Cannot close app for user {user_id}: no app open",
                extra={'event_type': 'app_close_no_app', 'user_id': user_id}
            )
            return False

        del self._apps[user_id]
        self.logger.info(
            f"Closed app for user {user_id}",
            extra={'event_type': 'app_closed', 'user_id': user_id, 'timestamp': time.time()}
        )
        return True

    def cleanup_exited_apps(self) -> int:
        """
        Drop apps whose user left them with the back action.

        Returns:
            Number of apps removed
        """
        exited = [
            user_id for user_id, app in self._apps.items()
            if app.navigation.exit_requested
        ]
        for user_id in exited:
            del self._apps[user_id]

        if exited:
            self.logger.info(f"Cleaned up {len(exited)} exited apps")
        return len(exited)

    def get_all_apps(self) -> Dict[int, Dict[str, Any]]:
        return {user_id: app.get_status() for user_id, app in self._apps.items()}

    def get_available_categories(self) -> List[str]:
        return self.catalog.categories()
