"""Tests for the command line entry point."""

import io
import json
import logging

import pytest
import yaml

from sensitive_filter.main import (
    EXIT_CACHE_DISABLED,
    EXIT_ERROR,
    EXIT_OK,
    build_parser,
    main,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back after main() reconfigures it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def config_file(tmp_path, words_file):
    def write(**settings):
        path = tmp_path / "config.yaml"
        data = {"file": str(words_file)}
        data.update(settings)
        path.write_text(yaml.safe_dump({"sensitive": data}), encoding="utf-8")
        return str(path)

    return write


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_filter_options(self):
        args = build_parser().parse_args(["filter", "abc", "--replace-code", "#"])

        assert args.command == "filter"
        assert args.text == "abc"
        assert args.replace_code == "#"


class TestSearchAndFilter:
    """Tests for the search and filter commands."""

    def test_search(self, config_file, sample_text, capsys):
        code = main(["--config", config_file(), "search", sample_text])

        assert code == EXIT_OK
        assert capsys.readouterr().out.splitlines() == ["笨蛋", "sb"]

    def test_filter(self, config_file, sample_text, capsys):
        code = main(["--config", config_file(), "filter", sample_text])

        assert code == EXIT_OK
        assert capsys.readouterr().out == "你是**大**嘛\n"

    def test_filter_replace_code(self, config_file, sample_text, capsys):
        main(["--config", config_file(), "filter", sample_text, "--replace-code", "o0"])
        assert capsys.readouterr().out == "你是o0o0大o0o0嘛\n"

    def test_filter_stdin(self, config_file, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("s*b\n"))

        code = main(["--config", config_file(disturbs="*"), "filter"])

        assert code == EXIT_OK
        assert capsys.readouterr().out == "***\n"

    def test_env_configuration(self, words_file, monkeypatch, sample_text, capsys):
        monkeypatch.setenv("SENSITIVE_WORDS_FILE", str(words_file))

        main(["search", sample_text])

        assert capsys.readouterr().out.splitlines() == ["笨蛋", "sb"]

    def test_missing_word_file(self, tmp_path, sample_text, capsys):
        path = tmp_path / "config.yaml"
        path.write_text(f"file: {tmp_path / 'missing.txt'}\n", encoding="utf-8")

        code = main(["--config", str(path), "search", sample_text])

        assert code == EXIT_ERROR
        assert "not exists" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "nope.yaml"), "search", "x"])
        assert code == EXIT_ERROR


class TestCacheCommands:
    """Tests for the cache and clear commands."""

    def test_cache_disabled(self, config_file, capsys):
        code = main(["--config", config_file(), "cache"])

        assert code == EXIT_CACHE_DISABLED
        assert "Please configure the cache value to true!" in capsys.readouterr().err

    def test_clear_disabled(self, config_file, capsys):
        assert main(["--config", config_file(), "clear"]) == EXIT_CACHE_DISABLED

    def test_cache_and_clear(self, config_file, tmp_path, capsys):
        path = config_file(cache=True)

        assert main(["--config", path, "cache"]) == EXIT_OK
        assert "Cache success." in capsys.readouterr().out
        assert list((tmp_path / "cache").glob("*.json"))

        assert main(["--config", path, "clear"]) == EXIT_OK
        assert "Clear cache success." in capsys.readouterr().out
        assert not list((tmp_path / "cache").glob("*.json"))

    def test_bad_cache_class(self, config_file, capsys):
        path = config_file(cache=True, cache_class="UndefinedClass")

        assert main(["--config", path, "cache"]) == EXIT_ERROR
        assert "cache class not exists" in capsys.readouterr().err

    def test_cache_long_word(self, tmp_path, capsys):
        path = tmp_path / "long.yaml"
        path.write_text(
            yaml.safe_dump({"sensitive": {"cache": True, "words": ["b" * 5000]}}),
            encoding="utf-8",
        )

        assert main(["--config", str(path), "cache"]) == EXIT_OK
        assert main(["--config", str(path), "search", "a" + "b" * 5000]) == EXIT_OK
        assert capsys.readouterr().out.splitlines()[-1] == "b" * 5000


class TestCorrelationId:
    """Tests for per-run correlation ids in CLI logs."""

    def test_explicit_id_in_error_log(self, tmp_path, capsys):
        code = main([
            "--correlation-id", "run-42",
            "--config", str(tmp_path / "nope.yaml"),
            "search", "x",
        ])

        assert code == EXIT_ERROR
        records = [
            json.loads(line)
            for line in capsys.readouterr().err.splitlines()
            if line.startswith("{")
        ]
        assert records
        assert all(r["correlation_id"] == "run-42" for r in records)

    def test_generated_id_shared_within_run(self, config_file, capsys):
        main(["--log-level", "info", "--config", config_file(), "search", "sb"])

        records = [
            json.loads(line)
            for line in capsys.readouterr().err.splitlines()
            if line.startswith("{")
        ]
        ids = {r["correlation_id"] for r in records}
        assert len(ids) == 1
        assert ids != {"-"}


class TestReplaceCodeOption:
    """Tests for --replace-code validation."""

    def test_empty_replace_code(self, config_file, sample_text, capsys):
        code = main(["--config", config_file(), "filter", sample_text, "--replace-code", ""])

        assert code == EXIT_ERROR
        assert "cannot be empty" in capsys.readouterr().err
