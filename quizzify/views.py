"""
Button views for the app screens.

Each app message carries one AppView. Pressing a button applies a session
or navigation operation, then the same message is re-rendered with the
buttons of the new state.
"""
import logging
from typing import Any, Callable, Optional

import discord

from .app_controller import QuizzifyApp
from .models import Question, Screen
from .navigation import Trigger
from .screens import build_embed, option_label

logger = logging.getLogger(__name__)

MAX_LABEL_LENGTH = 80
MAX_CHOICE_BUTTONS = 20

Action = Callable[[], Any]


def _label(text: str) -> str:
    if len(text) <= MAX_LABEL_LENGTH:
        return text
    return text[:MAX_LABEL_LENGTH - 3] + "..."


class ActionButton(discord.ui.Button):
    """Button that runs one app operation when pressed."""

    def __init__(self, *, label: str, action: Action, style: discord.ButtonStyle = discord.ButtonStyle.secondary, row: Optional[int] = None):
        super().__init__(label=_label(label), style=style, row=row)
        self.action = action

    async def callback(self, interaction: discord.Interaction) -> None:
        assert isinstance(self.view, AppView)
        await self.view.on_action(interaction, self.action)


class AppView(discord.ui.View):
    """View rendering the buttons for an app's current state."""

    def __init__(self, *, app: QuizzifyApp, timeout: float = 600):
        super().__init__(timeout=timeout)
        self.app = app
        self.message: Optional[discord.Message] = None
        self.build_view()

    def build_view(self) -> None:
        """Replace the buttons with those of the app's current state."""
        self.clear_items()
        navigation = self.app.navigation

        if navigation.exit_requested or navigation.is_loading:
            return

        if navigation.pending_confirmation is not None:
            confirm_label = "Quit?" if navigation.pending_confirmation == Trigger.QUIT_QUIZ else "Logout"
            self.add_item(ActionButton(label=confirm_label, action=navigation.confirm, style=discord.ButtonStyle.danger))
            self.add_item(ActionButton(label="Dismiss", action=navigation.dismiss))
            return

        screen = navigation.current_screen
        if screen == Screen.LOGIN:
            self._add_trigger(Trigger.SUBMIT_LOGIN, "Login", discord.ButtonStyle.primary)
            self._add_trigger(Trigger.GO_TO_REGISTER, "Don't have an account? Register")
            self._add_trigger(Trigger.SYSTEM_BACK, "Exit")
        elif screen == Screen.REGISTER:
            self._add_trigger(Trigger.SUBMIT_REGISTRATION, "Register", discord.ButtonStyle.primary)
            self._add_trigger(Trigger.BACK_TO_LOGIN, "Already have an account? Login")
        elif screen == Screen.MENU:
            self._build_menu()
        elif screen == Screen.QUIZ:
            self._build_quiz()
        elif screen == Screen.PROFILE:
            self._add_trigger(Trigger.CLOSE_PROFILE, "⬅ Menu")

    def _build_menu(self) -> None:
        navigation = self.app.navigation
        # Rows 0-3 hold categories, row 4 the menu actions
        for index, category in enumerate(self.app.catalog.categories()[:MAX_CHOICE_BUTTONS]):
            self.add_item(ActionButton(
                label=category,
                action=lambda category=category: navigation.fire(Trigger.SELECT_CATEGORY, category=category),
                style=discord.ButtonStyle.primary,
                row=index // 5
            ))
        self.add_item(ActionButton(label="Profile", action=lambda: navigation.fire(Trigger.OPEN_PROFILE), row=4))
        self.add_item(ActionButton(
            label="Logout",
            action=lambda: navigation.request_confirmation(Trigger.LOGOUT),
            style=discord.ButtonStyle.danger,
            row=4
        ))
        self._add_trigger(Trigger.SYSTEM_BACK, "Exit", row=4)

    def _build_quiz(self) -> None:
        navigation = self.app.navigation
        session = self.app.session
        question = session.current_question()

        if question is None:
            self._add_trigger(Trigger.RETURN_HOME, "Return to Home", discord.ButtonStyle.primary)
            return

        position = session.current_position
        for index, option in enumerate(question.options[:MAX_CHOICE_BUTTONS]):
            self.add_item(ActionButton(
                label=f"{option_label(index)}. {option}",
                action=lambda index=index: self._answer(position, question, index),
                style=discord.ButtonStyle.primary,
                row=index // 5
            ))
        self.add_item(ActionButton(
            label="⬅ Quit",
            action=lambda: navigation.request_confirmation(Trigger.QUIT_QUIZ),
            row=4
        ))

    def _answer(self, position: int, question: Question, selected_index: int) -> None:
        """Submit an answer only if its button belongs to the question on screen."""
        navigation = self.app.navigation
        session = self.app.session
        if (navigation.current_screen != Screen.QUIZ or navigation.pending_confirmation is not None
                or session.current_position != position or session.current_question() is not question):
            logger.info(
                f"Ignoring stale answer from user {self.app.user_id}",
                extra={
                    'event_type': 'answer_stale',
                    'user_id': self.app.user_id,
                    'screen': navigation.current_screen.value,
                    'button_position': position
                }
            )
            return
        session.submit_answer(selected_index)

    def _add_trigger(self, trigger: Trigger, label: str, style: discord.ButtonStyle = discord.ButtonStyle.secondary, row: Optional[int] = None) -> None:
        navigation = self.app.navigation
        if navigation.can_fire(trigger):
            self.add_item(ActionButton(label=label, action=lambda: navigation.fire(trigger), style=style, row=row))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id == self.app.user_id:
            return True
        await interaction.response.send_message(
            content="**This quiz belongs to someone else. Use `/quizzify` to open your own.**",
            ephemeral=True
        )
        return False

    async def on_action(self, interaction: discord.Interaction, action: Action) -> None:
        """
        Apply an operation and re-render the message.

        A loading transition is shown first, then the message is edited again
        once the loading pause has passed.
        """
        action()
        await self.refresh(interaction)

        navigation = self.app.navigation
        if navigation.is_loading:
            await navigation.settle()
            self.build_view()
            await interaction.edit_original_response(embed=build_embed(self.app), view=self)

        if navigation.exit_requested:
            self.stop()

    async def refresh(self, interaction: discord.Interaction) -> None:
        self.build_view()
        await interaction.response.edit_message(embed=build_embed(self.app), view=self)

    async def send(self, interaction: discord.Interaction, ephemeral: bool = False) -> None:
        await interaction.response.send_message(embed=build_embed(self.app), view=self, ephemeral=ephemeral)
        try:
            self.message = await interaction.original_response()
        except discord.HTTPException as e:
            logger.warning(f"Could not fetch app message for user {self.app.user_id}: {e}")

    async def close(self) -> None:
        """Stop handling presses and strip the buttons from the message."""
        self.stop()
        await self._remove_buttons()

    async def on_timeout(self) -> None:
        await self._remove_buttons()

    async def _remove_buttons(self) -> None:
        if self.message is None:
            return
        try:
            await self.message.edit(view=None)
        except discord.HTTPException as e:
            logger.warning(f"Failed to remove buttons for user {self.app.user_id}: {e}")

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item[Any]) -> None:
        logger.error(f"Error handling button for user {self.app.user_id}: {error}", exc_info=error)
        content = "**Something went wrong, please try again.**"
        try:
            if interaction.response.is_done():
                await interaction.followup.send(content=content, ephemeral=True)
            else:
                await interaction.response.send_message(content=content, ephemeral=True)
        except discord.HTTPException:
            logger.error("Failed to send error response to user")
