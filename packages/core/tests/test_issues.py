"""Tests for the Finding model and path normalization."""

import dataclasses

import pytest

from prca_core.issues import Finding, normalize_path


def make_finding(path="src/foo.py", line=100, message="Foo", rule="Bar", priority=None):
    return Finding(
        affected_file_relative_path=path,
        line=line,
        message=message,
        rule=rule,
        provider_type="fake",
        priority=priority,
    )


class TestFindingValidation:
    def test_invalid_path_characters_raise(self):
        with pytest.raises(ValueError, match="affected_file_relative_path"):
            make_finding(path="foo<bar")

    @pytest.mark.parametrize("path", [r"c:\src\foo.cs", "/foo", r"\foo"])
    def test_absolute_path_raises(self, path):
        with pytest.raises(ValueError, match="relative"):
            make_finding(path=path)

    @pytest.mark.parametrize("line", [0, -1])
    def test_non_positive_line_raises(self, line):
        with pytest.raises(ValueError, match="line"):
            make_finding(line=line)

    @pytest.mark.parametrize("line", [True, 2.5, "3"])
    def test_non_integer_line_raises(self, line):
        with pytest.raises(ValueError, match="line must be a positive integer"):
            make_finding(line=line)

    def test_line_without_file_raises(self):
        with pytest.raises(ValueError, match="line"):
            make_finding(path=None, line=10)

    @pytest.mark.parametrize("message", [None, "", " "])
    def test_missing_message_raises(self, message):
        with pytest.raises(ValueError, match="message"):
            make_finding(message=message)

    @pytest.mark.parametrize("rule", [None, ""])
    def test_missing_rule_raises(self, rule):
        with pytest.raises(ValueError, match="rule"):
            make_finding(rule=rule)


class TestFindingFields:
    @pytest.mark.parametrize("path", [None, "", " "])
    def test_empty_path_becomes_none(self, path):
        assert make_finding(path=path, line=None).affected_file_relative_path is None

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("foo", "foo"),
            ("foo\\bar", "foo/bar"),
            ("foo/bar", "foo/bar"),
            ("foo\\bar\\", "foo/bar"),
            ("foo/bar/", "foo/bar"),
            (".\\foo", "foo"),
            ("./foo", "foo"),
            ("foo\\..\\bar", "foo/../bar"),
            ("foo/../bar", "foo/../bar"),
        ],
    )
    def test_path_is_normalized(self, path, expected):
        assert make_finding(path=path).affected_file_relative_path == expected

    @pytest.mark.parametrize("line", [None, 1, 2**31 - 1])
    def test_line_is_kept(self, line):
        assert make_finding(line=line).line == line

    def test_fields_are_kept(self):
        finding = make_finding(message="message", rule="rule", priority=3)
        assert finding.message == "message"
        assert finding.rule == "rule"
        assert finding.provider_type == "fake"
        assert finding.priority == 3

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            make_finding().message = "other"

    def test_equal_findings_hash_equal(self):
        assert hash(make_finding(path="src\\foo.py")) == hash(make_finding(path="src/foo.py"))


class TestNormalizePath:
    def test_collapses_repeated_separators(self):
        assert normalize_path("src//foo\\\\bar.py") == "src/foo/bar.py"

    def test_dot_only_path_becomes_none(self):
        assert normalize_path("./") is None
