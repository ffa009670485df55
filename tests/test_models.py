"""
Unit tests for result and profile models.
"""
import unittest

from quizzify.models import QuizResult, Screen, UserProfile


class TestQuizResult(unittest.TestCase):
    """Test cases for QuizResult."""

    def test_percentage(self):
        self.assertEqual(QuizResult("Math Quiz", 7, 10).percentage, 70)
        self.assertEqual(QuizResult("Math Quiz", 2, 3).percentage, 67)

    def test_empty_quiz_percentage_is_zero(self):
        self.assertEqual(QuizResult("unknown", 0, 0).percentage, 0)

    def test_summary(self):
        self.assertEqual(QuizResult("Science Quiz", 10, 10).summary, "100%")


class TestUserProfile(unittest.TestCase):
    """Test cases for UserProfile defaults and counters."""

    def test_defaults(self):
        profile = UserProfile()
        self.assertEqual(profile.display_name, "John Doe")
        self.assertEqual(profile.handle, "@JustMeHopeless")
        self.assertEqual(profile.courses_enrolled, 3)
        self.assertEqual(profile.quizzes_done, 0)

    def test_history_not_shared(self):
        first = UserProfile()
        first.history.append(QuizResult("Math Quiz", 1, 10))

        self.assertEqual(UserProfile().history, [])
        self.assertEqual(first.quizzes_done, 1)


class TestScreen(unittest.TestCase):
    """Test cases for the Screen enum."""

    def test_all_screens_present(self):
        self.assertEqual(
            {screen.value for screen in Screen},
            {"login", "register", "menu", "quiz", "profile", "loading"}
        )


if __name__ == '__main__':
    unittest.main()
