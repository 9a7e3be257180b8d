"""
Tests for configuration loading.
"""

import os

import pytest

from firefox_runtime.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_MOZ_PATH,
    DEFAULT_NATIVE_MESSAGING_PATH,
    ConfigParams,
    dump_config,
    load_config,
    parse_boolean,
    parse_config_text,
    resolve_config_path,
    strip_quotes,
    write_config,
)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_returns_defaults(self, tmp_path):
        """A missing file yields the defaults and found=False."""
        config, found = load_config(tmp_path / "nope.toml")

        assert found is False
        assert config == ConfigParams()
        assert config.moz_path == DEFAULT_MOZ_PATH
        assert config.native_messaging_path == DEFAULT_NATIVE_MESSAGING_PATH
        assert config.wayland_enable is True
        assert config.enable_kde_integration is True
        assert config.enable_gnome_integration is True

    def test_directory_is_not_a_config(self, tmp_path):
        """Opening a directory fails like a missing file."""
        config, found = load_config(tmp_path)

        assert found is False
        assert config == ConfigParams()

    def test_empty_file_is_found(self, tmp_path):
        """An empty file is found and leaves every default in place."""
        path = tmp_path / "empty.toml"
        path.write_text("")

        config, found = load_config(path)

        assert found is True
        assert config == ConfigParams()

    def test_full_file(self, tmp_path):
        """Every recognized key is applied."""
        path = tmp_path / "firefox-runtime.toml"
        path.write_text(
            "# comment\n"
            "[general]\n"
            'moz_path = "/usr/lib/firefox/firefox"\n'
            "native_messaging_path = '/usr/lib/mozilla/native-messaging-hosts/'\n"
            "\n"
            "[wayland]\n"
            "enable = false\n"
            "\n"
            "[desktop]\n"
            "enable_kde_integration = no\n"
            "enable_gnome_integration = 0\n"
        )

        config, found = load_config(path)

        assert found is True
        assert config.moz_path == "/usr/lib/firefox/firefox"
        assert config.native_messaging_path == "/usr/lib/mozilla/native-messaging-hosts/"
        assert config.wayland_enable is False
        assert config.enable_kde_integration is False
        assert config.enable_gnome_integration is False

    def test_config_is_immutable(self):
        """ConfigParams can't be modified after load."""
        config = ConfigParams()

        with pytest.raises(AttributeError):
            config.moz_path = "/tmp/other"


class TestParseConfigText:
    """Tests for the line parser."""

    def test_keys_outside_their_section_are_ignored(self):
        """moz_path in [wayland] or before any header does nothing."""
        config = parse_config_text(
            "moz_path = /top/level\n"
            "[wayland]\n"
            "moz_path = /wrong/section\n"
        )

        assert config.moz_path == DEFAULT_MOZ_PATH

    def test_unknown_keys_and_sections_are_ignored(self):
        """Unknown keys leave defaults untouched."""
        config = parse_config_text(
            "[general]\n"
            "profile = dev-edition\n"
            "[extras]\n"
            "enable = false\n"
            "[wayland]\n"
            "enabled = false\n"
        )

        assert config == ConfigParams()

    def test_section_names_are_case_sensitive(self):
        """[General] is not [general]."""
        config = parse_config_text("[General]\nmoz_path = /a/b\n")

        assert config.moz_path == DEFAULT_MOZ_PATH

    def test_malformed_header_keeps_current_section(self):
        """A header without ']' does not change the section."""
        config = parse_config_text(
            "[general]\n"
            "[wayland\n"
            "moz_path = /still/general\n"
        )

        assert config.moz_path == "/still/general"

    def test_header_trailing_text_is_ignored(self):
        """Anything after the closing bracket is dropped."""
        config = parse_config_text("[desktop] # integration\nenable_kde_integration = false\n")

        assert config.enable_kde_integration is False

    def test_whitespace_around_lines_and_keys(self):
        """Indented lines and padded keys still match."""
        config = parse_config_text(
            "   [general]   \n"
            "\t moz_path\t=   /opt/firefox/firefox   \n"
        )

        assert config.moz_path == "/opt/firefox/firefox"

    def test_indented_comment_is_skipped(self):
        """Comments may be indented."""
        config = parse_config_text("[general]\n    # moz_path = /commented\n")

        assert config.moz_path == DEFAULT_MOZ_PATH

    def test_value_splits_at_first_equals(self):
        """Only the first '=' separates key and value."""
        config = parse_config_text("[general]\nmoz_path = /opt/a=b\n")

        assert config.moz_path == "/opt/a=b"

    def test_lines_without_equals_are_ignored(self):
        """Stray text does not disturb parsing."""
        config = parse_config_text(
            "[general]\n"
            "this line means nothing\n"
            "moz_path = /opt/x\n"
        )

        assert config.moz_path == "/opt/x"

    def test_later_assignment_wins(self):
        """Repeated keys keep the last value."""
        config = parse_config_text(
            "[wayland]\n"
            "enable = false\n"
            "enable = true\n"
        )

        assert config.wayland_enable is True

    def test_empty_boolean_is_false(self):
        """An empty boolean value parses to false."""
        config = parse_config_text('[wayland]\nenable = ""\n')

        assert config.wayland_enable is False

    def test_empty_string_value(self):
        """An empty string value is kept as empty."""
        config = parse_config_text("[general]\nnative_messaging_path =\n")

        assert config.native_messaging_path == ""

    def test_undecodable_bytes_are_preserved(self, tmp_path):
        """Non-UTF-8 path bytes reach the OS unchanged."""
        path = tmp_path / "latin1.toml"
        path.write_bytes(b"[general]\nmoz_path = /opt/caf\xe9/firefox\n")

        config, found = load_config(path)

        assert found is True
        assert os.fsencode(config.moz_path) == b"/opt/caf\xe9/firefox"

    def test_only_newline_ends_a_line(self):
        """Control characters such as \\x1c stay inside the value."""
        config = parse_config_text("[general]\nmoz_path = /opt/a\x1cb\n")

        assert config.moz_path == "/opt/a\x1cb"

    def test_crlf_line_endings(self):
        config = parse_config_text("[general]\r\nmoz_path = /opt/x\r\n")

        assert config.moz_path == "/opt/x"

    def test_long_values_are_not_truncated(self):
        """Values longer than any fixed buffer are kept whole."""
        long_path = "/opt/" + "x" * 2000 + "/firefox"
        config = parse_config_text(f"[general]\nmoz_path = {long_path}\n")

        assert config.moz_path == long_path


class TestQuoteStripping:
    """Tests for strip_quotes() as seen through moz_path."""

    @pytest.mark.parametrize("raw", ['"/a/b"', "'/a/b'", "/a/b"])
    def test_quotes_are_stripped(self, raw):
        config = parse_config_text(f"[general]\nmoz_path = {raw}\n")

        assert config.moz_path == "/a/b"

    def test_mismatched_quotes_are_kept(self):
        config = parse_config_text("[general]\nmoz_path = \"/a/b'\n")

        assert config.moz_path == "\"/a/b'"

    def test_only_one_layer_is_stripped(self):
        assert strip_quotes('""/a/b""') == '"/a/b"'

    def test_inner_quotes_of_other_kind_survive(self):
        assert strip_quotes("\"it's\"") == "it's"

    def test_single_quote_character(self):
        """A lone quote is not a quoted value."""
        assert strip_quotes('"') == '"'

    def test_empty_quoted_value(self):
        assert strip_quotes("''") == ""


class TestParseBoolean:
    """Tests for parse_boolean()."""

    @pytest.mark.parametrize("value", ["true", "yes", "1", "  true  "])
    def test_true_values(self, value):
        assert parse_boolean(value) is True

    @pytest.mark.parametrize(
        "value",
        ["false", "no", "0", "", "banana", "True", "YES", "on", None],
    )
    def test_false_values(self, value):
        assert parse_boolean(value) is False


class TestResolveConfigPath:
    """Tests for resolve_config_path()."""

    def test_default_path(self):
        assert resolve_config_path({}) == DEFAULT_CONFIG_PATH

    def test_environment_override(self):
        env = {"FIREFOX_RUNTIME_AURORA": "/home/u/firefox-runtime.toml"}

        assert resolve_config_path(env) == "/home/u/firefox-runtime.toml"

    def test_empty_override_is_used_as_is(self):
        assert resolve_config_path({"FIREFOX_RUNTIME_AURORA": ""}) == ""


class TestWriteConfig:
    """Tests for dump_config() / write_config()."""

    def test_write_and_reload(self, tmp_path):
        """A written config reloads to identical values."""
        params = ConfigParams(
            moz_path="/opt/firefox-nightly/firefox",
            native_messaging_path="/usr/share/mozilla/native-messaging-hosts/",
            wayland_enable=False,
            enable_kde_integration=True,
            enable_gnome_integration=False,
        )

        path = write_config(params, tmp_path / "etc" / "firefox-runtime.toml")
        loaded, found = load_config(path)

        assert found is True
        assert loaded == params

    def test_dump_lists_all_sections(self):
        text = dump_config(ConfigParams())

        assert "[general]" in text
        assert "[wayland]" in text
        assert "[desktop]" in text
        assert f'moz_path = "{DEFAULT_MOZ_PATH}"' in text
        assert "enable = true" in text
