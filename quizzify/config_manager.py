"""
Configuration manager for Quizzify app settings.
"""
import logging
from typing import Optional, Dict, Any, List
from pathlib import Path

from .models import AppSettings


class ConfigManager:
    """Manages app configuration settings."""

    # Default configuration values
    DEFAULT_LOADING_DELAY = 1.5
    DEFAULT_CATALOG_DIRECTORY = None  # Use the built-in catalog
    DEFAULT_STRICT_CATEGORIES = False
    DEFAULT_VIEW_TIMEOUT = 600

    # Validation limits
    MIN_LOADING_DELAY = 0.0
    MAX_LOADING_DELAY = 10.0
    MIN_VIEW_TIMEOUT = 60
    MAX_VIEW_TIMEOUT = 3600  # 1 hour

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._settings = AppSettings()

    def get_app_settings(self) -> AppSettings:
        """
        Get a copy of the current app settings.

        Returns:
            AppSettings object with current configuration
        """
        return AppSettings(
            loading_delay=self._settings.loading_delay,
            catalog_directory=self._settings.catalog_directory,
            strict_categories=self._settings.strict_categories,
            view_timeout=self._settings.view_timeout
        )

    def set_loading_delay(self, delay: float) -> Dict[str, any]:
        """
        Set how long the loading screen is shown.

        Args:
            delay: Delay in seconds

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if isinstance(delay, bool) or not isinstance(delay, (int, float)):
            error_msg = f"Loading delay must be a number, got {type(delay).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a number, got {type(delay).__name__}"
            }

        if delay < self.MIN_LOADING_DELAY or delay > self.MAX_LOADING_DELAY:
            error_msg = (
                f"Loading delay must be between {self.MIN_LOADING_DELAY} "
                f"and {self.MAX_LOADING_DELAY} seconds"
            )
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ {error_msg}"
            }

        self._settings.loading_delay = float(delay)
        self.logger.info(f"Loading delay set to {delay} seconds")
        return {
            'success': True,
            'message': f"Loading delay set to {delay} seconds",
            'user_message': f"✅ Loading screen will show for {delay} seconds"
        }

    def get_loading_delay(self) -> float:
        return self._settings.loading_delay

    def set_catalog_directory(self, directory: Optional[str]) -> Dict[str, any]:
        """
        Set the directory holding JSON catalog files.

        Args:
            directory: Path to catalog files, or None for the built-in catalog

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if directory is None:
            self._settings.catalog_directory = None
            self.logger.info("Catalog directory cleared, using built-in catalog")
            return {
                'success': True,
                'message': "Using built-in catalog",
                'user_message': "✅ Using the built-in quiz catalog"
            }

        if not isinstance(directory, str):
            error_msg = f"Catalog directory must be a string, got {type(directory).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a path string, got {type(directory).__name__}"
            }

        if not directory.strip():
            error_msg = "Catalog directory cannot be empty"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': "❌ Directory path cannot be empty"
            }

        try:
            normalized_path = str(Path(directory).resolve())
        except (OSError, ValueError) as e:
            error_msg = f"Invalid directory path format: {e}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid path format: {directory}"
            }

        self._settings.catalog_directory = normalized_path
        self.logger.info(f"Catalog directory set to {normalized_path}")
        return {
            'success': True,
            'message': f"Catalog directory set to {normalized_path}",
            'user_message': f"✅ Catalog directory set to {normalized_path}"
        }

    def get_catalog_directory(self) -> Optional[str]:
        return self._settings.catalog_directory

    def set_strict_categories(self, strict: bool) -> Dict[str, any]:
        """
        Set whether unknown categories are rejected instead of starting an empty quiz.

        Args:
            strict: True to reject unknown categories

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(strict, bool):
            error_msg = f"Strict categories must be a boolean, got {type(strict).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected true/false, got {type(strict).__name__}"
            }

        self._settings.strict_categories = strict
        mode = "strict" if strict else "permissive"
        self.logger.info(f"Category lookup set to {mode}")
        return {
            'success': True,
            'message': f"Category lookup set to {mode}",
            'user_message': f"✅ Category lookup is now {mode}"
        }

    def get_strict_categories(self) -> bool:
        return self._settings.strict_categories

    def set_view_timeout(self, timeout: int) -> Dict[str, any]:
        """
        Set how long an app message keeps its buttons active.

        Args:
            timeout: Timeout in seconds

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if isinstance(timeout, bool) or not isinstance(timeout, int):
            error_msg = f"View timeout must be an integer, got {type(timeout).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a number, got {type(timeout).__name__}"
            }

        if timeout < self.MIN_VIEW_TIMEOUT:
            error_msg = f"View timeout must be at least {self.MIN_VIEW_TIMEOUT} seconds"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Timeout too short: Minimum is {self.MIN_VIEW_TIMEOUT} seconds"
            }

        if timeout > self.MAX_VIEW_TIMEOUT:
            error_msg = f"View timeout cannot exceed {self.MAX_VIEW_TIMEOUT} seconds"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Timeout too long: Maximum is {self.MAX_VIEW_TIMEOUT} seconds"
            }

        self._settings.view_timeout = timeout
        self.logger.info(f"View timeout set to {timeout} seconds")
        return {
            'success': True,
            'message': f"View timeout set to {timeout} seconds",
            'user_message': f"✅ Buttons stay active for {timeout} seconds"
        }

    def get_view_timeout(self) -> int:
        return self._settings.view_timeout

    def apply_config(self, config: Dict[str, Any]) -> List[str]:
        """
        Apply the 'quiz' section of a loaded config.json.

        Invalid values are logged and skipped; the defaults stay in place.

        Args:
            config: Parsed configuration dictionary

        Returns:
            List of error messages for values that were rejected
        """
        quiz_config = config.get('quiz', {}) or {}
        errors = []

        setters = (
            ('loading_delay', self.set_loading_delay),
            ('catalog_directory', self.set_catalog_directory),
            ('strict_categories', self.set_strict_categories),
            ('view_timeout', self.set_view_timeout),
        )
        for key, setter in setters:
            if key not in quiz_config:
                continue
            result = setter(quiz_config[key])
            if not result['success']:
                errors.append(f"{key}: {result['error']}")

        if errors:
            self.logger.warning(f"Ignored {len(errors)} invalid configuration values")
        else:
            self.logger.info("Configuration applied successfully")
        return errors

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values."""
        self._settings = AppSettings(
            loading_delay=self.DEFAULT_LOADING_DELAY,
            catalog_directory=self.DEFAULT_CATALOG_DIRECTORY,
            strict_categories=self.DEFAULT_STRICT_CATEGORIES,
            view_timeout=self.DEFAULT_VIEW_TIMEOUT
        )
        self.logger.info("All settings reset to default values")

    def validate_settings(self) -> Dict[str, Any]:
        """
        Validate current settings and return validation results.

        Returns:
            Dictionary with validation results and any issues found
        """
        validation_result = {
            "valid": True,
            "issues": []
        }

        delay = self._settings.loading_delay
        if (isinstance(delay, bool) or not isinstance(delay, (int, float)) or
                not self.MIN_LOADING_DELAY <= delay <= self.MAX_LOADING_DELAY):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid loading delay: {delay}")

        directory = self._settings.catalog_directory
        if directory is not None and (not isinstance(directory, str) or not directory.strip()):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid catalog directory: {directory}")

        if not isinstance(self._settings.strict_categories, bool):
            validation_result["valid"] = False
            validation_result["issues"].append(
                f"Invalid strict categories setting: {self._settings.strict_categories}"
            )

        timeout = self._settings.view_timeout
        if (isinstance(timeout, bool) or not isinstance(timeout, int) or
                not self.MIN_VIEW_TIMEOUT <= timeout <= self.MAX_VIEW_TIMEOUT):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid view timeout: {timeout}")

        return validation_result

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        catalog_str = self._settings.catalog_directory or "built-in"
        mode_str = "strict" if self._settings.strict_categories else "permissive"

        return (
            f"App Settings:\n"
            f"• Loading delay: {self._settings.loading_delay} seconds\n"
            f"• Catalog: {catalog_str}\n"
            f"• Category lookup: {mode_str}\n"
            f"• Button timeout: {self._settings.view_timeout} seconds"
        )
