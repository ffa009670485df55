"""
Unit tests for the NavigationController screen state machine.
"""
import logging
import unittest
from unittest.mock import AsyncMock, Mock

from quizzify.catalog import QuizCatalog
from quizzify.models import Screen
from quizzify.navigation import HISTORY_LIMIT, NavigationController, Trigger
from quizzify.quiz_session import QuizSession, SessionState


class NavigationTestCase(unittest.IsolatedAsyncioTestCase):
    """Shared setup: a controller over the shipped catalog with an instant sleep."""

    def setUp(self):
        """Set up test fixtures."""
        logging.disable(logging.CRITICAL)
        self.catalog = QuizCatalog.default()
        self.session = QuizSession(self.catalog)
        self.sleep = AsyncMock()
        self.nav = NavigationController(self.session, loading_delay=1.5, sleep=self.sleep)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    async def login(self):
        self.nav.fire(Trigger.SUBMIT_LOGIN)
        await self.nav.settle()


class TestAuthFlow(NavigationTestCase):
    """Test cases for the login and register screens."""

    def test_starts_on_login(self):
        """The app opens on the login screen."""
        self.assertEqual(self.nav.current_screen, Screen.LOGIN)
        self.assertFalse(self.nav.exit_requested)

    async def test_login_passes_through_loading(self):
        """Submitting login shows loading, then the menu after the delay."""
        screen = self.nav.fire(Trigger.SUBMIT_LOGIN)

        self.assertEqual(screen, Screen.LOADING)
        self.assertTrue(self.nav.is_loading)
        self.assertEqual(self.nav.pending_target, Screen.MENU)

        screen = await self.nav.settle()

        self.assertEqual(screen, Screen.MENU)
        self.sleep.assert_awaited_once_with(1.5)
        self.assertFalse(self.nav.is_loading)

    async def test_register_flow(self):
        """Register then submit lands on the menu."""
        self.assertEqual(self.nav.fire(Trigger.GO_TO_REGISTER), Screen.REGISTER)
        self.assertEqual(self.nav.fire(Trigger.SUBMIT_REGISTRATION), Screen.LOADING)

        await self.nav.settle()

        self.assertEqual(self.nav.current_screen, Screen.MENU)
        self.assertEqual(
            list(self.nav.history),
            [Screen.LOGIN, Screen.REGISTER, Screen.LOADING, Screen.MENU]
        )

    def test_history_keeps_most_recent_screens(self):
        """Screen history is capped, dropping the oldest entries."""
        for _ in range(HISTORY_LIMIT):
            self.nav.fire(Trigger.GO_TO_REGISTER)
            self.nav.fire(Trigger.BACK_TO_LOGIN)

        self.assertEqual(len(self.nav.history), HISTORY_LIMIT)
        self.assertEqual(self.nav.history[-1], Screen.LOGIN)
        self.assertEqual(self.nav.history[-2], Screen.REGISTER)

    def test_back_to_login_from_register(self):
        """Both the login link and system back return to login from register."""
        self.nav.fire(Trigger.GO_TO_REGISTER)
        self.assertEqual(self.nav.fire(Trigger.BACK_TO_LOGIN), Screen.LOGIN)

        self.nav.fire(Trigger.GO_TO_REGISTER)
        self.assertEqual(self.nav.fire(Trigger.SYSTEM_BACK), Screen.LOGIN)
        self.assertFalse(self.nav.exit_requested)

    def test_back_on_login_requests_exit(self):
        """System back on the login screen exits the app."""
        screen = self.nav.fire(Trigger.SYSTEM_BACK)

        self.assertEqual(screen, Screen.LOGIN)
        self.assertTrue(self.nav.exit_requested)

    def test_triggers_ignored_while_loading(self):
        """No trigger is applied during the loading pause."""
        self.nav.fire(Trigger.SUBMIT_LOGIN)

        self.assertEqual(self.nav.fire(Trigger.SELECT_CATEGORY, "Math Quiz"), Screen.LOADING)
        self.assertEqual(self.nav.fire(Trigger.SYSTEM_BACK), Screen.LOADING)
        self.assertEqual(self.nav.allowed_triggers(), [])
        self.assertEqual(self.session.state, SessionState.NOT_STARTED)

    async def test_settle_without_loading_is_noop(self):
        """settle() returns immediately when nothing is pending."""
        screen = await self.nav.settle()

        self.assertEqual(screen, Screen.LOGIN)
        self.sleep.assert_not_awaited()


class TestMenuAndQuiz(NavigationTestCase):
    """Test cases for the menu, quiz and profile screens."""

    async def asyncSetUp(self):
        await self.login()

    def test_select_category_starts_quiz(self):
        """Selecting a category opens the quiz screen for that category."""
        screen = self.nav.fire(Trigger.SELECT_CATEGORY, category="Math Quiz")

        self.assertEqual(screen, Screen.QUIZ)
        self.assertEqual(self.session.active_category, "Math Quiz")
        self.assertEqual(self.session.current_question().text, "What is 2 + 2?")

    def test_select_category_without_name_ignored(self):
        """SELECT_CATEGORY without a category leaves the menu showing."""
        self.assertEqual(self.nav.fire(Trigger.SELECT_CATEGORY), Screen.MENU)
        self.assertEqual(self.session.state, SessionState.NOT_STARTED)

    def test_strict_unknown_category_stays_on_menu(self):
        """A rejected category keeps the user on the menu."""
        self.session.strict_categories = True

        self.assertEqual(self.nav.fire(Trigger.SELECT_CATEGORY, "Nope"), Screen.MENU)

    def test_quit_quiz_with_confirmation(self):
        """Confirming quit returns to the menu and leaves the catalog as it was."""
        before = self.catalog.questions_for("Math Quiz")
        self.nav.fire(Trigger.SELECT_CATEGORY, "Math Quiz")
        self.session.submit_answer(1)

        self.assertTrue(self.nav.request_confirmation(Trigger.QUIT_QUIZ))
        self.assertEqual(self.nav.pending_confirmation, Trigger.QUIT_QUIZ)
        self.assertEqual(self.nav.current_screen, Screen.QUIZ)

        screen = self.nav.confirm()

        self.assertEqual(screen, Screen.MENU)
        self.assertIsNone(self.nav.pending_confirmation)
        self.assertEqual(self.catalog.questions_for("Math Quiz"), before)

    def test_dismiss_confirmation_keeps_quiz(self):
        """Dismissing the prompt keeps the quiz screen and its progress."""
        self.nav.fire(Trigger.SELECT_CATEGORY, "Math Quiz")
        self.session.submit_answer(1)
        self.nav.request_confirmation(Trigger.QUIT_QUIZ)

        self.nav.dismiss()

        self.assertIsNone(self.nav.pending_confirmation)
        self.assertEqual(self.nav.current_screen, Screen.QUIZ)
        self.assertEqual(self.session.current_score(), 1)

    def test_confirm_without_prompt_is_noop(self):
        """confirm() with nothing pending changes nothing."""
        self.assertEqual(self.nav.confirm(), Screen.MENU)

    def test_request_confirmation_rejects_other_triggers(self):
        """Only quit and logout can be confirmed."""
        self.assertFalse(self.nav.request_confirmation(Trigger.OPEN_PROFILE))
        self.assertFalse(self.nav.request_confirmation(Trigger.QUIT_QUIZ))
        self.assertIsNone(self.nav.pending_confirmation)

    def test_system_back_from_quiz_returns_to_menu(self):
        """System back leaves the quiz without a prompt."""
        self.nav.fire(Trigger.SELECT_CATEGORY, "Science Quiz")

        self.assertEqual(self.nav.fire(Trigger.SYSTEM_BACK), Screen.MENU)
        self.assertFalse(self.nav.exit_requested)

    def test_return_home_only_after_finish(self):
        """Return to home is offered once the quiz is finished."""
        self.nav.fire(Trigger.SELECT_CATEGORY, "Math Quiz")
        self.assertFalse(self.nav.can_fire(Trigger.RETURN_HOME))
        self.assertEqual(self.nav.fire(Trigger.RETURN_HOME), Screen.QUIZ)

        for _ in range(10):
            self.session.submit_answer(1)

        self.assertTrue(self.nav.showing_result())
        self.assertEqual(self.nav.fire(Trigger.RETURN_HOME), Screen.MENU)

    def test_profile_round_trip(self):
        """The profile screen opens from the menu and closes back to it."""
        self.assertEqual(self.nav.fire(Trigger.OPEN_PROFILE), Screen.PROFILE)
        self.assertEqual(self.nav.fire(Trigger.CLOSE_PROFILE), Screen.MENU)

        self.nav.fire(Trigger.OPEN_PROFILE)
        self.assertEqual(self.nav.fire(Trigger.SYSTEM_BACK), Screen.MENU)

    def test_back_on_menu_requests_exit(self):
        """System back on the menu exits the app."""
        self.nav.fire(Trigger.SYSTEM_BACK)

        self.assertTrue(self.nav.exit_requested)
        self.assertEqual(self.nav.current_screen, Screen.MENU)

    async def test_logout_resets_session_and_returns_to_login(self):
        """Logout passes through loading and clears the quiz session."""
        self.nav.fire(Trigger.SELECT_CATEGORY, "Math Quiz")
        self.nav.fire(Trigger.QUIT_QUIZ)
        self.nav.request_confirmation(Trigger.LOGOUT)

        self.assertEqual(self.nav.confirm(), Screen.LOADING)
        self.assertEqual(self.session.state, SessionState.NOT_STARTED)

        await self.nav.settle()

        self.assertEqual(self.nav.current_screen, Screen.LOGIN)

    def test_disallowed_trigger_ignored(self):
        """Triggers that do not belong to the current screen do nothing."""
        self.assertEqual(self.nav.fire(Trigger.SUBMIT_LOGIN), Screen.MENU)
        self.assertEqual(self.nav.fire(Trigger.QUIT_QUIZ), Screen.MENU)
        self.assertEqual(self.nav.fire(Trigger.CLOSE_PROFILE), Screen.MENU)

    def test_allowed_triggers_on_menu(self):
        """The menu allows category selection, profile, logout and back."""
        self.assertEqual(
            set(self.nav.allowed_triggers()),
            {Trigger.SELECT_CATEGORY, Trigger.OPEN_PROFILE, Trigger.LOGOUT, Trigger.SYSTEM_BACK}
        )

    def test_observers_notified(self):
        """Observers are called with the controller on each screen change."""
        observer = Mock()
        self.nav.subscribe(observer)

        self.nav.fire(Trigger.OPEN_PROFILE)
        self.nav.unsubscribe(observer)
        self.nav.fire(Trigger.CLOSE_PROFILE)

        observer.assert_called_once_with(self.nav)


if __name__ == '__main__':
    unittest.main()
