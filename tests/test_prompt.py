"""Tests for the interactive removal state machine."""

from __future__ import annotations

from collections.abc import Iterator

from cargo_cache.cli.prompt import PromptState, RemovalPrompt, run_prompt


def _drive(*lines: str) -> tuple[RemovalPrompt, list[str]]:
    prompt = RemovalPrompt()
    feed: Iterator[str] = iter(lines)
    shown: list[str] = []
    run_prompt(prompt, lambda: next(feed, None), shown.append)
    return prompt, shown


def test_category_then_yes_confirms() -> None:
    prompt, _ = _drive('git-checkouts\n', 'yes\n')

    assert prompt.state is PromptState.DONE
    assert prompt.confirmed
    assert prompt.category_csv == 'git-repos'


def test_no_keeps_directory() -> None:
    prompt, shown = _drive('registry\n', 'no\n')

    assert prompt.done
    assert not prompt.confirmed
    assert "Keeping 'registry'." in shown


def test_git_warns_about_checkouts() -> None:
    prompt = RemovalPrompt()

    replies = prompt.feed('git')

    assert prompt.state is PromptState.AWAITING_CONFIRMATION
    assert replies[0] == 'This removes the bare repositories AND their checkouts.'
    assert prompt.category_csv == 'git-db'


def test_invalid_category_reprompts() -> None:
    prompt = RemovalPrompt()

    replies = prompt.feed('everything')

    assert prompt.state is PromptState.AWAITING_CATEGORY
    assert replies[0] == 'Invalid input.'


def test_bin_dir_points_to_cargo_uninstall() -> None:
    prompt = RemovalPrompt()

    assert prompt.feed('bin-dir') == ["Please use 'cargo uninstall'."]
    assert prompt.state is PromptState.AWAITING_CATEGORY


def test_invalid_confirmation_reprompts() -> None:
    prompt = RemovalPrompt()
    prompt.feed('registry')

    replies = prompt.feed('maybe')

    assert prompt.state is PromptState.AWAITING_CONFIRMATION
    assert replies == ['Invalid input: maybe', "Please use 'yes' or 'no'."]


def test_abort() -> None:
    prompt, shown = _drive('abort\n')

    assert prompt.done
    assert not prompt.confirmed
    assert shown[-1] == 'Aborted.'


def test_end_of_input_aborts() -> None:
    prompt, shown = _drive('git\n')

    assert prompt.done
    assert not prompt.confirmed
    assert shown[-1] == 'Aborted.'
