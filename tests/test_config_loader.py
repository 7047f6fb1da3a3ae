import pytest

from readshelf.utils.config_loader import ConfigError, load_feeds_config


def _write(tmp_path, text):
    path = tmp_path / "feeds.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_feeds_and_ignores_unknown_keys(tmp_path):
    path = _write(
        tmp_path,
        "version: 2\n"
        "feeds:\n"
        "  - name: ' Tech Trends '\n"
        "    url: https://tech.example.com/rss\n",
    )
    assert load_feeds_config(path) == [("Tech Trends", "https://tech.example.com/rss")]


def test_empty_file_yields_no_feeds(tmp_path):
    assert load_feeds_config(_write(tmp_path, "")) == []


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_feeds_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "feeds: not-a-list\n",
        "feeds:\n  - just a string\n",
        "feeds:\n  - name: Blog\n",
        "feeds:\n  - name: ''\n    url: https://b.example.com/rss\n",
        "feeds:\n  - name: Blog\n    url: ftp://b.example.com/rss\n",
        "- top level list\n",
        "feeds: [unclosed\n",
    ],
)
def test_invalid_configs_raise(tmp_path, text):
    with pytest.raises(ConfigError):
        load_feeds_config(_write(tmp_path, text))
