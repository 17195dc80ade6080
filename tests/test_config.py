from __future__ import annotations

import pytest

from minigrep import Config, TooManyParametersError, UsageError, parse_config


HELP_CONFIG = Config(query="", file_path="", ignore_case=False, help=True)


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_single_help_flag(flag):
    assert parse_config(["prog", flag]) == HELP_CONFIG


def test_query_path_and_ignore_case():
    config = parse_config(["prog", "to", "poem.txt", "-i"])

    assert config == Config(query="to", file_path="poem.txt", ignore_case=True, help=False)


def test_plain_query_and_path():
    config = parse_config(["prog", "to", "poem.txt"])

    assert config == Config(query="to", file_path="poem.txt")


@pytest.mark.parametrize(
    "args",
    [
        ["prog", "-i", "to", "poem.txt"],
        ["prog", "to", "-i", "poem.txt"],
        ["prog", "--ignore_case", "to", "poem.txt"],
        ["prog", "-i", "to", "-i", "poem.txt", "--ignore_case"],
    ],
)
def test_flags_interleaved_with_positionals(args):
    assert parse_config(args) == Config(query="to", file_path="poem.txt", ignore_case=True)


def test_first_positional_is_discarded():
    # flags before the program name do not shift the slots
    assert parse_config(["-i", "prog", "to", "poem.txt"]) == Config(
        query="to", file_path="poem.txt", ignore_case=True
    )


@pytest.mark.parametrize(
    "args",
    [
        ["prog", "to", "poem.txt", "-h"],
        ["prog", "-i", "--help"],
        ["prog", "-i", "to", "--help", "poem.txt"],
        ["prog", "-h", "a", "b", "c", "d"],
    ],
)
def test_help_anywhere_wins(args):
    assert parse_config(args) == HELP_CONFIG


def test_help_after_too_many_parameters_is_not_reached():
    with pytest.raises(TooManyParametersError):
        parse_config(["prog", "a", "b", "c", "-h"])


@pytest.mark.parametrize("args", [[], ["prog"], ["prog", "a"], ["prog", "-i"]])
def test_too_few_arguments(args):
    with pytest.raises(UsageError, match=r"minigrep \[PATTERN\] \[FILE_PATH\]"):
        parse_config(args)


def test_too_many_parameters():
    with pytest.raises(TooManyParametersError, match="Too many parameters"):
        parse_config(["prog", "a", "b", "c", "d"])


def test_missing_path_is_left_empty():
    assert parse_config(["prog", "-i", "to"]) == Config(query="to", file_path="", ignore_case=True)


def test_empty_query_is_kept():
    assert parse_config(["prog", "", "poem.txt"]) == Config(query="", file_path="poem.txt")


def test_config_is_immutable():
    config = parse_config(["prog", "to", "poem.txt"])

    with pytest.raises(AttributeError):
        config.query = "other"
