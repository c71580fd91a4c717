from pathlib import Path

from watchread.config import WatchReadConfig


def test_defaults():
    config = WatchReadConfig()
    assert config.input_path == Path("in.txt")
    assert config.output_path == Path("log.txt")
    assert config.event_driven is True
    assert config.silent is True
    assert config.log_level == "INFO"
    assert config.log_json is False
    assert config.log_file is None


def test_paths_are_coerced():
    config = WatchReadConfig(input_path="a/in.txt", output_path="b/out.txt")
    assert config.input_path == Path("a/in.txt")
    assert config.output_path == Path("b/out.txt")


def test_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("WATCHREAD_INPUT", str(tmp_path / "values.txt"))
    monkeypatch.setenv("WATCHREAD_OUTPUT", str(tmp_path / "out.txt"))
    monkeypatch.setenv("WATCHREAD_EVENT_DRIVEN", "off")
    monkeypatch.setenv("WATCHREAD_SILENT", "0")
    monkeypatch.setenv("WATCHREAD_LOG_LEVEL", "debug")

    config = WatchReadConfig.from_env()
    assert config.input_path == tmp_path / "values.txt"
    assert config.output_path == tmp_path / "out.txt"
    assert config.event_driven is False
    assert config.silent is False
    assert config.log_level == "DEBUG"


def test_from_env_ignores_unrecognised_flags(monkeypatch):
    monkeypatch.setenv("WATCHREAD_EVENT_DRIVEN", "maybe")
    monkeypatch.delenv("WATCHREAD_SILENT", raising=False)
    config = WatchReadConfig.from_env()
    assert config.event_driven is True
    assert config.silent is True
