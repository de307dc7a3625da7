"""Interactive command-line interface for logging and editing meals.

Usage:
    meal-logger                      # choose an action from the menu
    meal-logger --action log         # log a new meal
    meal-logger --action edit        # edit an existing meal
    meal-logger --log-file path.json # use another log file
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from meal_logger.app_logging import configure_logging
from meal_logger.config import Settings
from meal_logger.containers import build_container
from meal_logger.domain.meals import MealEntry
from meal_logger.services.editor import (
    ChatUpdate,
    CompareImage,
    EditRequest,
    ReplaceImage,
)
from meal_logger.services.meals import MealLogService, StorageError

LOG_MEAL = "Log a new meal"
EDIT_MEAL = "Edit an existing meal"
ACTIONS = {"log": LOG_MEAL, "edit": EDIT_MEAL}

REPLACE_IMAGE = "Upload a new image"
CHAT_UPDATE = "Update details via chat"
COMPARE_IMAGE = "Compare a new image to estimate remaining calories"
EDIT_OPTIONS = [REPLACE_IMAGE, CHAT_UPDATE, COMPARE_IMAGE]

IMAGE_PROMPT = "Enter the path to the image of your meal: "
DESCRIPTION_PROMPT = "Enter a description of your meal: "
UPDATE_PROMPT = (
    'Enter your update (e.g., "I also had a diet Mountain Dew" or '
    '"I only ate 1/2 of my potatoes"): '
)

_logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Interface for operator prompts."""

    def ask(self, question: str) -> str:
        """Return a free-text answer."""

    def choose(self, message: str, choices: Sequence[str]) -> int:
        """Return the index of the selected choice."""

    def show(self, text: str) -> None:
        """Display text to the operator."""


class ConsolePrompter(Prompter):
    """Prompter reading from stdin and writing to stdout."""

    def ask(self, question: str) -> str:
        return input(question).strip()

    def choose(self, message: str, choices: Sequence[str]) -> int:
        print(message)
        for number, choice in enumerate(choices, start=1):
            print(f"  {number}) {choice}")
        while True:
            answer = input(f"Select 1-{len(choices)}: ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return int(answer) - 1
            print("Invalid selection, try again.")

    def show(self, text: str) -> None:
        print(text)


@dataclass
class MealLoggerController:
    """Runs one interactive session against the meal log."""

    meal_log_service: MealLogService
    prompter: Prompter
    log_path: Path

    async def run(self, action: str | None = None) -> None:
        """Load the log and perform one action; raises StorageError on I/O failure."""
        entries = self.meal_log_service.load()
        if action is None:
            choices = list(ACTIONS.values())
            selected = self.prompter.choose("What would you like to do?", choices)
            action = choices[selected]
        if action == LOG_MEAL:
            await self._log_meal(entries)
        else:
            await self._edit_meal(entries)

    async def _log_meal(self, entries: list[MealEntry]) -> None:
        image_path = self.prompter.ask(IMAGE_PROMPT)
        description = self.prompter.ask(DESCRIPTION_PROMPT)
        _, analysis = await self.meal_log_service.log_meal(
            entries, description, image_path
        )
        self.prompter.show(analysis.summary)
        self.prompter.show(f"Meal logged successfully in {self.log_path}")

    async def _edit_meal(self, entries: list[MealEntry]) -> None:
        if not entries:
            self.prompter.show("No meals to edit.")
            return
        choices = [
            f"{number}. {entry.description} ({entry.date.isoformat()})"
            for number, entry in enumerate(entries, start=1)
        ]
        index = self.prompter.choose("Select a meal to edit:", choices)
        self.prompter.show("Current meal details:")
        self.prompter.show(entries[index].model_dump_json(indent=2, by_alias=True))
        option = EDIT_OPTIONS[
            self.prompter.choose("How would you like to edit this meal?", EDIT_OPTIONS)
        ]
        request = self._build_request(option)
        try:
            result = await self.meal_log_service.edit_meal(entries, index, request)
        except (ZeroDivisionError, ValueError) as exc:
            _logger.error("Could not adjust portion: %s", exc)
            return
        self.prompter.show(result.message)
        if result.changed:
            self.prompter.show(f"Meal updated successfully in {self.log_path}")

    def _build_request(self, option: str) -> EditRequest:
        if option == REPLACE_IMAGE:
            return ReplaceImage(self.prompter.ask(IMAGE_PROMPT))
        if option == CHAT_UPDATE:
            return ChatUpdate(self.prompter.ask(UPDATE_PROMPT))
        return CompareImage(self.prompter.ask(IMAGE_PROMPT))


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="meal-logger",
        description="Log meals from photos and descriptions, and edit them later.",
    )
    parser.add_argument(
        "--action",
        choices=sorted(ACTIONS),
        help="Skip the menu and run this action",
    )
    parser.add_argument("--log-file", type=Path, help="Path to the JSON meal log")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


async def _run(
    settings: Settings, args: argparse.Namespace, prompter: Prompter
) -> None:
    container = build_container(settings, log_file=args.log_file)
    controller = MealLoggerController(
        meal_log_service=container.meal_log_service,
        prompter=prompter,
        log_path=container.log_path,
    )
    try:
        await controller.run(ACTIONS.get(args.action) if args.action else None)
    finally:
        await container.close_resources()


def main(argv: Sequence[str] | None = None, prompter: Prompter | None = None) -> int:
    """Entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    try:
        settings = Settings()
    except ValidationError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 2
    try:
        asyncio.run(_run(settings, args, prompter or ConsolePrompter()))
    except StorageError as exc:
        _logger.error("%s", exc)
        return 1
    except (KeyboardInterrupt, EOFError):
        _logger.warning("Aborted, nothing saved")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
