"""
Test fixtures and sample data for Quizzify tests.
"""
import json
from pathlib import Path
from typing import Dict, List
from unittest.mock import Mock, AsyncMock

import discord

from quizzify.catalog import QuizCatalog
from quizzify.models import Question


class TestFixtures:
    """Centralized test fixtures for all test modules."""

    @staticmethod
    def create_sample_questions() -> List[Question]:
        """Create sample questions for testing."""
        return [
            Question("What is 2+2?", ("3", "4", "5"), 1),
            Question("What is the capital of France?", ("London", "Berlin", "Paris", "Madrid"), 2),
            Question("What color is the sky?", ("Blue", "Green"), 0),
        ]

    @staticmethod
    def create_sample_catalog() -> QuizCatalog:
        """Create a two-category catalog for testing."""
        return QuizCatalog({
            "Sample Quiz": TestFixtures.create_sample_questions(),
            "Tiny Quiz": [Question("Is water wet?", ("Yes", "No"), 0)],
        })

    @staticmethod
    def create_valid_catalog_json(category: str = "Capitals") -> Dict:
        """Create valid catalog file JSON structure."""
        return {
            "category": category,
            "questions": [
                {
                    "question": "What is the capital of Japan?",
                    "options": ["Seoul", "Tokyo", "Beijing"],
                    "correct": 1
                },
                {
                    "question": "What is the capital of Italy?",
                    "options": ["Rome", "Milan"],
                    "correct": 0
                }
            ]
        }

    @staticmethod
    def create_invalid_catalog_json_structures() -> List[Dict]:
        """Create various invalid catalog JSON structures for testing."""
        return [
            # Missing 'questions' key
            {"quiz": [{"question": "Test?", "options": ["a", "b"], "correct": 0}]},
            # 'questions' not a list
            {"questions": "not a list"},
            # Empty questions
            {"questions": []},
            # Missing 'correct'
            {"questions": [{"question": "Test?", "options": ["a", "b"]}]},
            # Too few options
            {"questions": [{"question": "Test?", "options": ["a"], "correct": 0}]},
            # Correct index out of range
            {"questions": [{"question": "Test?", "options": ["a", "b"], "correct": 2}]},
            # Non-string option
            {"questions": [{"question": "Test?", "options": ["a", 2], "correct": 0}]},
            # Boolean correct index
            {"questions": [{"question": "Test?", "options": ["a", "b"], "correct": True}]},
            # Empty category name
            {"category": " ", "questions": [{"question": "Test?", "options": ["a", "b"], "correct": 0}]},
        ]

    @staticmethod
    def write_catalog_file(directory: str, filename: str, data) -> Path:
        """Write a catalog file into a directory."""
        path = Path(directory) / filename
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path


class MockDiscordObjects:
    """Mock Discord objects for testing bot functionality."""

    @staticmethod
    def create_mock_interaction(user_id: int = 67890, channel_id: int = 12345) -> Mock:
        """Create mock Discord interaction."""
        interaction = Mock(spec=discord.Interaction)
        interaction.channel_id = channel_id
        interaction.user = Mock()
        interaction.user.id = user_id
        interaction.response = Mock()
        interaction.response.is_done.return_value = False
        interaction.response.send_message = AsyncMock()
        interaction.response.edit_message = AsyncMock()
        interaction.followup = Mock()
        interaction.followup.send = AsyncMock()
        interaction.edit_original_response = AsyncMock()
        interaction.original_response = AsyncMock(return_value=MockDiscordObjects.create_mock_message())
        return interaction

    @staticmethod
    def create_mock_message(message_id: int = 11111) -> Mock:
        """Create mock Discord message."""
        message = Mock(spec=discord.Message)
        message.id = message_id
        message.edit = AsyncMock()
        return message


class TestDataValidation:
    """Validation helpers for test assertions."""

    @staticmethod
    def validate_question(question: Question) -> bool:
        """Validate Question object structure."""
        return (
            isinstance(question.text, str) and
            len(question.text) > 0 and
            isinstance(question.options, tuple) and
            len(question.options) >= 2 and
            all(isinstance(option, str) for option in question.options) and
            0 <= question.correct_option_index < len(question.options)
        )
