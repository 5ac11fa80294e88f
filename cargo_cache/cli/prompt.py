"""
Interactive removal prompt (--remove).

A small state machine, independent of stdin, so the terminal loop and the
tests drive it the same way:

    AWAITING_CATEGORY --category--> AWAITING_CONFIRMATION --yes/no--> DONE
            |                                   |
            +------------abort------------------+--------(eof)------> DONE

Each accepted keyword maps to a --remove-dir category list, which the caller
hands to CacheDirectorySelector once the removal is confirmed.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

__all__ = ['KEYWORD_CATEGORIES', 'PromptState', 'RemovalPrompt', 'run_prompt']

KEYWORD_CATEGORIES: dict[str, str] = {
    'git-checkouts': 'git-repos',
    'git': 'git-db',
    'registry': 'registry,registry-index',
}

_CHOICES = "Possible directories to delete: 'git-checkouts', 'git', 'registry'."


class PromptState(enum.Enum):
    AWAITING_CATEGORY = 'awaiting-category'
    AWAITING_CONFIRMATION = 'awaiting-confirmation'
    DONE = 'done'


class RemovalPrompt:
    """Interactive choice of a cache directory to delete, followed by a yes/no confirmation."""

    def __init__(self) -> None:
        self.state = PromptState.AWAITING_CATEGORY
        self.keyword: str | None = None
        self.confirmed = False

    @property
    def done(self) -> bool:
        return self.state is PromptState.DONE

    @property
    def category_csv(self) -> str | None:
        """The --remove-dir equivalent of the chosen keyword."""
        return KEYWORD_CATEGORIES[self.keyword] if self.keyword is not None else None

    def greeting(self) -> list[str]:
        return [_CHOICES, "'abort' to abort."]

    def feed(self, line: str) -> list[str]:
        """Consume one line of input and return the lines to show the user."""
        answer = line.strip()
        match self.state:
            case PromptState.AWAITING_CATEGORY:
                return self._on_category(answer)
            case PromptState.AWAITING_CONFIRMATION:
                return self._on_confirmation(answer)
            case PromptState.DONE:
                raise RuntimeError('Prompt already finished')

    def close(self) -> list[str]:
        """End of input: abort whatever was in progress."""
        if self.done:
            return []
        self.state = PromptState.DONE
        self.confirmed = False
        return ['Aborted.']

    def _on_category(self, answer: str) -> list[str]:
        if answer == 'abort':
            self.state = PromptState.DONE
            return ['Aborted.']
        if answer == 'bin-dir':
            return ["Please use 'cargo uninstall'."]
        if answer not in KEYWORD_CATEGORIES:
            return ['Invalid input.', _CHOICES]
        self.keyword = answer
        self.state = PromptState.AWAITING_CONFIRMATION
        lines = [f"Really delete '{answer}'? (yes/no)"]
        if answer == 'git':
            lines.insert(0, 'This removes the bare repositories AND their checkouts.')
        return lines

    def _on_confirmation(self, answer: str) -> list[str]:
        if answer == 'yes':
            self.state = PromptState.DONE
            self.confirmed = True
            return [f"Deleting '{self.keyword}'."]
        if answer == 'no':
            self.state = PromptState.DONE
            return [f"Keeping '{self.keyword}'."]
        return [f'Invalid input: {answer}', "Please use 'yes' or 'no'."]


def run_prompt(prompt: RemovalPrompt, read_line: Callable[[], str | None], write: Callable[[str], None]) -> None:
    """Drive a prompt to completion; read_line returns None at end of input."""
    for line in prompt.greeting():
        write(line)
    while not prompt.done:
        raw = read_line()
        replies = prompt.close() if raw is None else prompt.feed(raw)
        for line in replies:
            write(line)
