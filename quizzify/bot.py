import discord
from discord.ext import commands
import logging
import os
from typing import Optional

from .catalog import CatalogLoader, QuizCatalog
from .config_manager import ConfigManager
from .app_controller import AppController
from .screens import build_error_embed
from .views import AppView

logger = logging.getLogger(__name__)


class QuizBot(commands.Bot):
    """Discord bot hosting one Quizzify app per user"""

    def __init__(self, config=None):
        intents = discord.Intents.none()
        intents.guilds = True  # Required for slash commands

        command_prefix = '!'
        if config and 'bot' in config:
            command_prefix = config['bot'].get('command_prefix', '!')

        super().__init__(
            command_prefix=command_prefix,  # Fallback prefix, mainly using slash commands
            intents=intents,
            help_command=None
        )

        self.app_config = config or {}

        self.config_manager: Optional[ConfigManager] = None
        self.catalog_loader: Optional[CatalogLoader] = None
        self.catalog: Optional[QuizCatalog] = None
        self.app_controller: Optional[AppController] = None

    async def setup_hook(self):
        """Called when the bot is starting up"""
        try:
            logger.info("Setting up bot components...")

            self.config_manager = ConfigManager()
            if self.app_config:
                config_errors = self.config_manager.apply_config(self.app_config)
                for error in config_errors:
                    logger.warning(f"Configuration value ignored: {error}")

            self.catalog = self.load_catalog()
            self.app_controller = AppController(self.catalog, self.config_manager)

            await self.setup_commands()

            logger.info("Bot setup completed successfully")

        except Exception as e:
            logger.error(f"Error during bot setup: {e}")
            raise

    def load_catalog(self) -> QuizCatalog:
        """Load the catalog from the configured directory, or use the built-in one"""
        catalog_directory = self.config_manager.get_catalog_directory()
        if catalog_directory is None:
            catalog = QuizCatalog.default()
            logger.info(f"Using built-in catalog with {len(catalog)} categories")
            return catalog

        self.catalog_loader = CatalogLoader(catalog_directory)
        catalog = self.catalog_loader.load()
        summary = self.catalog_loader.get_loading_summary()
        logger.info(
            f"Loaded {summary['total_categories']} categories from {catalog_directory}"
            f"{' (built-in fallback)' if summary['fallback_active'] else ''}"
        )
        for error in summary['errors']:
            logger.warning(f"Catalog loading error: {error}")
        return catalog

    async def setup_commands(self):
        """Register all slash commands"""
        try:
            @self.tree.command(name="quizzify", description="Open the Quizzify app")
            async def quizzify_command(interaction: discord.Interaction):
                await self.handle_open(interaction)

            @self.tree.command(name="quit", description="Close your Quizzify app")
            async def quit_command(interaction: discord.Interaction):
                await self.handle_quit(interaction)

            @self.tree.command(name="status", description="Show your current screen and quiz progress")
            async def status_command(interaction: discord.Interaction):
                await self.handle_status(interaction)

            @self.tree.command(name="categories", description="List the available quiz categories")
            async def categories_command(interaction: discord.Interaction):
                await self.handle_categories(interaction)

            @self.tree.command(name="help", description="Display available commands and their descriptions")
            async def help_command(interaction: discord.Interaction):
                await self.handle_help(interaction)

            logger.info("Slash commands registered successfully")

        except Exception as e:
            logger.error(f"Error setting up commands: {e}")
            raise

    async def on_ready(self):
        """Called when the bot has successfully connected to Discord"""
        logger.info(f"Bot is ready! Logged in as {self.user}")
        logger.info(f"Bot is in {len(self.guilds)} guilds")

        try:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} slash commands")
        except discord.HTTPException as e:
            logger.error(f"Failed to sync slash commands: {e}")

    async def on_error(self, event, *args, **kwargs):
        """Handle general bot errors"""
        logger.error(f"An error occurred in event {event}", exc_info=True)

    async def handle_open(self, interaction: discord.Interaction):
        """Handle /quizzify command"""
        try:
            app = self.app_controller.open_app(interaction.user.id)
            self.app_controller.cleanup_exited_apps()

            if app.view is not None:
                await app.view.close()

            view = AppView(app=app, timeout=self.config_manager.get_view_timeout())
            app.view = view
            await view.send(interaction)

        except discord.HTTPException as e:
            logger.error(f"Discord API error opening app for user {interaction.user.id}: {e}")
            await self.send_error_response(interaction, "Failed to open the app. Please try again.", "❌ Discord Error")

        except Exception as e:
            logger.error(f"Error in quizzify command: {e}", exc_info=True)
            await self.send_error_response(interaction, "Failed to open the app", "❌ App Error")

    async def handle_quit(self, interaction: discord.Interaction):
        """Handle /quit command"""
        try:
            app = self.app_controller.get_app(interaction.user.id)
            if app is not None and app.view is not None:
                await app.view.close()

            if self.app_controller.close_app(interaction.user.id):
                await self.send_info_response(interaction, "Your app was closed. Use `/quizzify` to start again.", "👋 App Closed")
            else:
                await self.send_warning_response(interaction, "You don't have an open app. Use `/quizzify` to open one.", "⚠️ No App Open")

        except Exception as e:
            logger.error(f"Error in quit command: {e}")
            await self.send_error_response(interaction, "Failed to close the app", "❌ Quit Error")

    async def handle_status(self, interaction: discord.Interaction):
        """Handle /status command"""
        try:
            app = self.app_controller.get_app(interaction.user.id)
            if app is None:
                await self.send_info_response(interaction, "You don't have an open app. Use `/quizzify` to open one.", "📊 Status")
                return

            status = app.get_status()
            session = status['session']

            embed = discord.Embed(title="📊 Quizzify Status", color=0x6699ff)
            embed.add_field(name="Screen", value=status['screen'].title(), inline=True)
            embed.add_field(name="Quizzes done", value=str(status['quizzes_done']), inline=True)

            if session['category'] is not None:
                embed.add_field(
                    name="🎯 Current Quiz",
                    value=(
                        f"**{session['category']}**\n"
                        f"Question {session['current_question']}/{session['total_questions']}\n"
                        f"Score: {session['score']}\n"
                        f"State: {session['state'].replace('_', ' ')}"
                    ),
                    inline=False
                )

            await interaction.response.send_message(embed=embed, ephemeral=True)

        except Exception as e:
            logger.error(f"Error in status command: {e}")
            await self.send_error_response(interaction, "Failed to get app status", "❌ Status Error")

    async def handle_categories(self, interaction: discord.Interaction):
        """Handle /categories command"""
        try:
            categories = self.app_controller.get_available_categories()
            embed = discord.Embed(title="📚 Quiz Categories", color=0x00ff00)
            embed.description = "\n".join(
                f"• **{category}** - {self.catalog.question_count(category)} questions"
                for category in categories
            ) or "No categories available."

            if self.catalog_loader is not None and self.catalog_loader.is_fallback_active():
                embed.add_field(
                    name="⚠️ Using Built-in Catalog",
                    value="No catalog files could be loaded, showing the built-in quizzes.",
                    inline=False
                )

            await interaction.response.send_message(embed=embed, ephemeral=True)

        except Exception as e:
            logger.error(f"Error in categories command: {e}")
            await self.send_error_response(interaction, "Failed to list categories", "❌ Categories Error")

    async def handle_help(self, interaction: discord.Interaction):
        """Handle /help command"""
        try:
            help_embed = discord.Embed(
                title="🎯 Quizzify Commands",
                description="Pick a quiz category, answer the questions and see your score",
                color=0x00ff00
            )

            help_embed.add_field(
                name="🎮 Commands",
                value=(
                    "`/quizzify` - Open (or reopen) your app\n"
                    "`/quit` - Close your app\n"
                    "`/status` - Show your current screen and quiz progress\n"
                    "`/categories` - List the available quiz categories\n"
                    "`/help` - Show this help message"
                ),
                inline=False
            )

            settings_summary = self.config_manager.get_settings_summary()
            help_embed.add_field(
                name="⚙️ Current Settings",
                value=f"```\n{settings_summary}\n```",
                inline=False
            )

            help_embed.set_footer(text="Use the buttons under the app message to navigate")

            await interaction.response.send_message(embed=help_embed, ephemeral=True)

        except Exception as e:
            logger.error(f"Error in help command: {e}")
            await self.send_error_response(interaction, "Failed to display help", "❌ Help Error")

    async def send_error_response(self, interaction: discord.Interaction, message: str, title: str = "❌ Error"):
        """Send formatted error response to user"""
        await self._send_ephemeral(interaction, build_error_embed(message, title))

    async def send_info_response(self, interaction: discord.Interaction, message: str, title: str = "ℹ️ Information"):
        """Send formatted info response to user"""
        await self._send_ephemeral(interaction, discord.Embed(title=title, description=message, color=0x6699ff))

    async def send_warning_response(self, interaction: discord.Interaction, message: str, title: str = "⚠️ Warning"):
        """Send formatted warning response to user"""
        await self._send_ephemeral(interaction, discord.Embed(title=title, description=message, color=0xffaa00))

    async def _send_ephemeral(self, interaction: discord.Interaction, embed: discord.Embed):
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException:
            logger.error("Failed to send response to user")


async def run_bot(token=None, config=None):
    """Run the bot with proper error handling"""
    if not token:
        token = os.getenv('DISCORD_BOT_TOKEN')

    if not token:
        logger.error("No Discord bot token provided")
        return

    bot = QuizBot(config)

    try:
        logger.info("Starting Quizzify bot...")
        await bot.start(token)
    except discord.LoginFailure:
        logger.error("Invalid bot token provided")
    except discord.HTTPException as e:
        logger.error(f"HTTP error occurred: {e}")
    finally:
        if not bot.is_closed():
            await bot.close()
