"""
Embed rendering for each app screen.
"""
import discord

from .app_controller import QuizzifyApp
from .models import Screen
from .navigation import Trigger

APP_NAME = "Quizzify"

PURPLE = 0x6650a4
ORANGE = 0xffa500
RED = 0xff0000
GREEN = 0x00ff00
BLUE = 0x6699ff

OPTION_LABELS = "ABCDEFGHIJ"

CONFIRMATION_PROMPTS = {
    Trigger.QUIT_QUIZ: "Are you sure you want to quit?",
    Trigger.LOGOUT: "Are you sure you want to Logout?",
}


def option_label(index: int) -> str:
    if index < len(OPTION_LABELS):
        return OPTION_LABELS[index]
    return str(index + 1)


def build_login_embed(app: QuizzifyApp) -> discord.Embed:
    embed = discord.Embed(
        title="Login",
        description="Sign in to start a quiz.",
        color=PURPLE
    )
    embed.set_footer(text="Don't have an account? Register")
    return embed


def build_register_embed(app: QuizzifyApp) -> discord.Embed:
    embed = discord.Embed(
        title="Register",
        description="Create an account to track your quiz results.",
        color=PURPLE
    )
    embed.set_footer(text="Already have an account? Login")
    return embed


def build_loading_embed(app: QuizzifyApp) -> discord.Embed:
    return discord.Embed(
        title=APP_NAME,
        description="⏳ Loading...",
        color=PURPLE
    )


def build_menu_embed(app: QuizzifyApp) -> discord.Embed:
    embed = discord.Embed(
        title=APP_NAME,
        description=f"Welcome, **{app.profile.display_name}**! Pick a quiz.",
        color=PURPLE
    )
    categories = app.catalog.categories()
    if categories:
        embed.add_field(
            name="📚 Quizzes",
            value="\n".join(
                f"• {category} ({app.catalog.question_count(category)} questions)"
                for category in categories
            ),
            inline=False
        )
    embed.add_field(
        name="👤 " + app.profile.handle,
        value=(
            f"{app.profile.courses_enrolled} Courses Enrolled\n"
            f"{app.profile.quizzes_done} Quizzes done"
        ),
        inline=False
    )
    return embed


def build_quiz_embed(app: QuizzifyApp) -> discord.Embed:
    """
    Render the current question with its numbered options and the score.

    Falls back to the result view once the session has no current question.
    """
    session = app.session
    question = session.current_question()
    if question is None:
        return build_result_embed(app)

    embed = discord.Embed(
        title=f"Quiz: {session.active_category}",
        description=f"**{question.text}**",
        color=ORANGE
    )
    embed.add_field(
        name="Options",
        value="\n".join(
            f"**{option_label(i)}.** {option}" for i, option in enumerate(question.options)
        ),
        inline=False
    )
    embed.add_field(name="Score", value=f"Score: {session.current_score()}", inline=False)
    embed.set_footer(
        text=f"Question {session.current_position + 1}/{session.total_questions}"
    )
    return embed


def build_result_embed(app: QuizzifyApp) -> discord.Embed:
    session = app.session
    embed = discord.Embed(
        title="🏁 Quiz Finished!",
        description=f"Quiz Finished! Your Score: {session.current_score()}",
        color=GREEN
    )
    if session.total_questions:
        result = session.get_result()
        embed.add_field(
            name=session.active_category or "Quiz",
            value=f"{result.score}/{result.total} correct ({result.summary})",
            inline=False
        )
    else:
        embed.add_field(
            name=session.active_category or "Quiz",
            value="This quiz has no questions.",
            inline=False
        )
    return embed


def build_profile_embed(app: QuizzifyApp) -> discord.Embed:
    profile = app.profile
    embed = discord.Embed(
        title="Profile Page",
        description=f"**{profile.display_name}**\n{profile.handle}",
        color=BLUE
    )
    if profile.history:
        history_text = "\n".join(
            f"• {result.category}: {result.summary}" for result in profile.history
        )
    else:
        history_text = "No quizzes finished yet."
    embed.add_field(name="Quiz Results History", value=history_text, inline=False)
    embed.set_footer(text=f"{profile.quizzes_done} Quizzes done")
    return embed


def build_confirmation_embed(trigger: Trigger) -> discord.Embed:
    return discord.Embed(
        title="Confirm Action",
        description=CONFIRMATION_PROMPTS.get(trigger, "Are you sure?"),
        color=PURPLE
    )


def build_exit_embed(app: QuizzifyApp) -> discord.Embed:
    return discord.Embed(
        title=APP_NAME,
        description="👋 See you next time! Use `/quizzify` to open the app again.",
        color=PURPLE
    )


SCREEN_BUILDERS = {
    Screen.LOGIN: build_login_embed,
    Screen.REGISTER: build_register_embed,
    Screen.LOADING: build_loading_embed,
    Screen.MENU: build_menu_embed,
    Screen.QUIZ: build_quiz_embed,
    Screen.PROFILE: build_profile_embed,
}


def build_embed(app: QuizzifyApp) -> discord.Embed:
    """
    Render the app's current screen.

    A pending confirmation prompt or an exit request takes precedence over
    the screen itself.

    Args:
        app: App instance to render

    Returns:
        Embed for the current state
    """
    navigation = app.navigation
    if navigation.exit_requested:
        return build_exit_embed(app)
    if navigation.pending_confirmation is not None:
        return build_confirmation_embed(navigation.pending_confirmation)
    return SCREEN_BUILDERS[navigation.current_screen](app)


def build_error_embed(message: str, title: str = "❌ Error") -> discord.Embed:
    embed = discord.Embed(title=title, description=message, color=RED)
    embed.set_footer(text="If this error persists, try using /help for available commands")
    return embed
