"""
Quiz catalog and JSON catalog loading.

The catalog is the read-only provider of questions per category. The loader
reads catalog files from a directory and falls back to the built-in quizzes
when nothing usable is found.
"""
import json
import os
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from pathlib import Path

from .models import Question
from .quiz_data import BUILTIN_QUIZZES


class CatalogError(Exception):
    """Raised when catalog contents break the catalog invariants."""
    pass


def parse_questions(raw_questions: Sequence[dict]) -> List[Question]:
    """
    Convert raw question dictionaries into Question objects.

    Args:
        raw_questions: Items shaped like {"question": str, "options": [...], "correct": int}

    Returns:
        List of Question objects

    Raises:
        ValueError: If an item cannot form a valid Question
    """
    return [
        Question(
            text=item["question"],
            options=tuple(item["options"]),
            correct_option_index=item["correct"]
        )
        for item in raw_questions
    ]


class QuizCatalog:
    """Immutable mapping from category name to its ordered questions."""

    def __init__(self, quizzes: Mapping[str, Sequence[Question]]):
        self._quizzes: Dict[str, Tuple[Question, ...]] = {}

        for category, questions in quizzes.items():
            if not isinstance(category, str) or not category.strip():
                raise CatalogError(f"Category name must be a non-empty string, got {category!r}")
            if not questions:
                raise CatalogError(f"Category '{category}' has no questions")
            for question in questions:
                if not isinstance(question, Question):
                    raise CatalogError(f"Category '{category}' contains a non-Question item: {question!r}")
            self._quizzes[category] = tuple(questions)

    @classmethod
    def default(cls) -> "QuizCatalog":
        """Build the catalog shipped with the app."""
        return cls({
            category: parse_questions(raw_questions)
            for category, raw_questions in BUILTIN_QUIZZES.items()
        })

    def questions_for(self, category: str) -> Tuple[Question, ...]:
        """
        Get the questions of a category.

        Args:
            category: Category name

        Returns:
            Ordered questions, or an empty tuple for an unknown category
        """
        return self._quizzes.get(category, ())

    def categories(self) -> List[str]:
        return list(self._quizzes.keys())

    def has_category(self, category: str) -> bool:
        return category in self._quizzes

    def question_count(self, category: str) -> int:
        return len(self.questions_for(category))

    def __len__(self) -> int:
        return len(self._quizzes)

    def __contains__(self, category: object) -> bool:
        return category in self._quizzes


class CatalogLoader:
    """Loads catalog files from a directory, one category per JSON file."""

    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

    def __init__(self, catalog_directory: str = "./quizzes/"):
        """
        Initialize CatalogLoader with catalog directory path.

        Args:
            catalog_directory: Path to directory containing JSON catalog files
        """
        self.catalog_directory = Path(catalog_directory)
        self.logger = logging.getLogger(__name__)
        self.load_errors: List[str] = []
        self.fallback_active = False
        self._loaded_categories: List[str] = []

    def load(self) -> QuizCatalog:
        """
        Load all JSON files from the catalog directory.

        Invalid files are skipped and reported through get_load_errors().
        The built-in catalog is returned when no file could be loaded.

        Returns:
            QuizCatalog built from the directory, or the built-in catalog
        """
        self.load_errors.clear()
        self.fallback_active = False
        self._loaded_categories = []

        if not self.catalog_directory.is_dir():
            self.load_errors.append(f"Catalog directory not found: {self.catalog_directory}")
            return self._fallback_catalog()

        scan_result = self._scan_catalog_files()
        if not scan_result['success']:
            self.load_errors.append(scan_result['error'])
            return self._fallback_catalog()

        json_files = scan_result['files']
        if not json_files:
            self.logger.warning(f"No JSON files found in {self.catalog_directory}")
            self.load_errors.append(f"No catalog files found in {self.catalog_directory}")
            return self._fallback_catalog()

        quizzes: Dict[str, List[Question]] = {}
        for json_file in json_files:
            load_result = self._load_catalog_file_safely(json_file)
            if not load_result['success']:
                self.load_errors.append(f"{json_file.name}: {load_result['error']}")
                continue

            category = load_result['category']
            if category in quizzes:
                self.load_errors.append(f"{json_file.name}: Duplicate category '{category}'")
                continue

            quizzes[category] = load_result['questions']
            self.logger.info(f"Loaded category '{category}' with {len(load_result['questions'])} questions")

        if not quizzes:
            self.logger.error("No catalog files could be loaded successfully")
            self.load_errors.append("All catalog files failed to load")
            return self._fallback_catalog()

        self._loaded_categories = list(quizzes.keys())
        self.logger.info(f"Successfully loaded {len(quizzes)} categories from {self.catalog_directory}")
        if self.load_errors:
            self.logger.warning(f"Encountered {len(self.load_errors)} catalog loading errors")

        return QuizCatalog(quizzes)

    def validate_catalog_structure(self, data: dict) -> Optional[str]:
        """
        Validate that JSON data has the catalog file structure.

        Expected structure:
        {
            "category": str,  # Optional, defaults to the file name
            "questions": [
                {"question": str, "options": [str, ...], "correct": int}
            ]
        }

        Args:
            data: Parsed JSON data to validate

        Returns:
            None if the structure is valid, otherwise an error description
        """
        if not isinstance(data, dict):
            return "Catalog data must be a JSON object"

        if "category" in data and (not isinstance(data["category"], str) or not data["category"].strip()):
            return "'category' must be a non-empty string"

        questions = data.get("questions")
        if not isinstance(questions, list):
            return "Catalog data must contain a 'questions' array"

        if not questions:
            return "Questions array cannot be empty"

        for i, item in enumerate(questions):
            if not isinstance(item, dict):
                return f"Question {i} must be an object"

            for key in ("question", "options", "correct"):
                if key not in item:
                    return f"Question {i} missing '{key}' field"

            if not isinstance(item["question"], str):
                return f"Question {i} 'question' field must be a string"

            options = item["options"]
            if not isinstance(options, list) or not all(isinstance(option, str) for option in options):
                return f"Question {i} 'options' field must be an array of strings"

            if len(options) < 2:
                return f"Question {i} needs at least 2 options"

            correct = item["correct"]
            if not isinstance(correct, int) or isinstance(correct, bool):
                return f"Question {i} 'correct' field must be an integer"

            if not 0 <= correct < len(options):
                return f"Question {i} 'correct' index {correct} is out of range"

        return None

    def _scan_catalog_files(self) -> Dict[str, any]:
        try:
            return {
                'success': True,
                'files': sorted(self.catalog_directory.glob("*.json"))
            }
        except OSError as e:
            return {
                'success': False,
                'error': f"System error scanning {self.catalog_directory}: {e}",
                'files': []
            }

    def _load_catalog_file_safely(self, json_file: Path) -> Dict[str, any]:
        """
        Load a single catalog file.

        Args:
            json_file: Path to the JSON file to load

        Returns:
            Dictionary with success status, and category/questions or an error message
        """
        try:
            if not os.access(json_file, os.R_OK):
                return {'success': False, 'error': "Permission denied: Cannot read file"}

            file_size = json_file.stat().st_size
            if file_size > self.MAX_FILE_SIZE:
                return {
                    'success': False,
                    'error': f"File too large ({file_size / 1024 / 1024:.1f}MB). "
                             f"Maximum size is {self.MAX_FILE_SIZE / 1024 / 1024}MB"
                }

            with open(json_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            validation_error = self.validate_catalog_structure(data)
            if validation_error:
                self.logger.error(f"Invalid catalog structure in {json_file}: {validation_error}")
                return {'success': False, 'error': validation_error}

            return {
                'success': True,
                'category': data.get("category", json_file.stem),
                'questions': parse_questions(data["questions"])
            }

        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in {json_file}: {e}")
            return {'success': False, 'error': f"Invalid JSON: {e}"}
        except OSError as e:
            self.logger.error(f"Failed to read catalog file {json_file}: {e}")
            return {'success': False, 'error': f"System error: {e}"}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    def _fallback_catalog(self) -> QuizCatalog:
        self.fallback_active = True
        self.logger.warning(
            f"Using built-in catalog, nothing loaded from {self.catalog_directory}",
            extra={
                'event_type': 'catalog_fallback',
                'catalog_directory': str(self.catalog_directory),
                'error_count': len(self.load_errors)
            }
        )
        catalog = QuizCatalog.default()
        self._loaded_categories = catalog.categories()
        return catalog

    def get_load_errors(self) -> List[str]:
        """
        Get list of errors encountered during the last load operation.

        Returns:
            List of error messages
        """
        return self.load_errors.copy()

    def has_load_errors(self) -> bool:
        return len(self.load_errors) > 0

    def is_fallback_active(self) -> bool:
        return self.fallback_active

    def get_loading_summary(self) -> Dict[str, any]:
        """
        Get a summary of the last loading operation.

        Returns:
            Dictionary with loading statistics and status
        """
        return {
            'total_categories': len(self._loaded_categories),
            'has_errors': self.has_load_errors(),
            'error_count': len(self.load_errors),
            'errors': self.get_load_errors(),
            'fallback_active': self.is_fallback_active(),
            'catalog_directory': str(self.catalog_directory),
            'available_categories': list(self._loaded_categories)
        }
