"""Tests for the review UI module."""

import hashlib
import io

import pytest
from rich.console import Console

from dup_manager.core.models import DuplicateGroup
from dup_manager.ui.review import (
    ReviewDecision,
    ReviewUI,
    parse_index_list,
    parse_path_list,
)


def make_ui(answers: str):
    """ReviewUI reading the given answers and printing into a buffer."""
    output = io.StringIO()
    console = Console(file=output, width=200, color_system=None)
    return ReviewUI(console, stream=io.StringIO(answers)), output


@pytest.fixture
def duplicate_pair(make_file):
    """Two files with the same content in different folders."""
    a = make_file("docs/a.txt", "X" * 10)
    b = make_file("backup/b.txt", "X" * 10)
    digest = hashlib.sha256(b"X" * 10).hexdigest()
    return DuplicateGroup(digest=digest, size=10, paths=[a, b])


class TestParsing:
    """Test the input parsers."""

    def test_parse_path_list_trims_and_drops_empty(self):
        assert parse_path_list(" C:\\One ,D:\\, ,/home/me ") == ["C:\\One", "D:\\", "/home/me"]

    def test_parse_path_list_empty(self):
        assert parse_path_list("   ") == []

    def test_parse_index_list_commas_and_whitespace(self):
        assert parse_index_list("2, 0\n1", 3) == [2, 0, 1]

    def test_parse_index_list_collapses_repeats(self):
        assert parse_index_list("1,1, 1", 2) == [1]

    def test_parse_index_list_empty(self):
        assert parse_index_list("", 2) == []

    def test_parse_index_list_rejects_non_numbers(self):
        with pytest.raises(ValueError, match="Not a row number"):
            parse_index_list("0, one", 2)

    def test_parse_index_list_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_index_list("2", 2)

    def test_parse_index_list_rejects_negative(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_index_list("-1", 2)


class TestPrompts:
    """Test the validation loops."""

    def test_prompt_roots_reprompts_until_all_exist(self, tmp_path):
        data = tmp_path / "data"
        data.mkdir()
        ui, output = make_ui(f"{tmp_path / 'nope'}, {data}\n\n{data}\n")

        roots = ui.prompt_roots()

        assert roots == [data]
        assert "Not exist:" in output.getvalue()
        assert "at least one directory" in output.getvalue()

    def test_prompt_roots_accepts_several(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        ui, _ = make_ui(f"{first} , {second}\n")

        assert ui.prompt_roots() == [first, second]

    def test_prompt_selection_reprompts_on_invalid(self, duplicate_pair):
        ui, output = make_ui("x\n5\n1, 0\n")

        assert ui.prompt_selection(duplicate_pair) == [1, 0]
        assert "Not a row number" in output.getvalue()
        assert "out of range" in output.getvalue()

    def test_confirm_is_case_insensitive_and_reprompts(self, duplicate_pair):
        ui, output = make_ui("maybe\nY\n")

        assert ui.confirm(duplicate_pair.paths) is True
        assert "Please enter Y or N" in output.getvalue()

    def test_confirm_no(self, duplicate_pair):
        ui, _ = make_ui("N\n")

        assert ui.confirm(duplicate_pair.paths) is False


class TestReviewGroup:
    """Test the per-group state machine."""

    def test_confirmed_selection_is_quarantined(self, duplicate_pair, quarantine, volume):
        a, b = duplicate_pair.paths
        ui, output = make_ui("0\ny\n")

        outcome = ui.review_group(duplicate_pair, 1, 1, quarantine)

        destination = volume / "DeletionDuplicates" / "docs" / "a.txt"
        assert outcome.decision is ReviewDecision.CONFIRMED
        assert outcome.selected == [0]
        assert [r.destination for r in outcome.results] == [destination]
        assert not a.exists()
        assert destination.read_bytes() == b"X" * 10
        assert b.read_bytes() == b"X" * 10
        manifest = (volume / "DeletionDuplicates" / "paths.txt").read_text(encoding="utf-8")
        assert manifest == f"Source: {a}\nDestination: {destination}\n\n"
        assert "Moved" in output.getvalue()

    def test_declined_selection_has_no_side_effects(self, duplicate_pair, quarantine, volume):
        ui, output = make_ui("0\nn\n")

        outcome = ui.review_group(duplicate_pair, 1, 1, quarantine)

        assert outcome.decision is ReviewDecision.DECLINED
        assert outcome.results == []
        assert all(path.exists() for path in duplicate_pair.paths)
        assert not (volume / "DeletionDuplicates").exists()
        assert "Action canceled" in output.getvalue()

    def test_empty_selection_skips_without_confirmation(self, duplicate_pair, quarantine):
        ui, _ = make_ui("\n")

        outcome = ui.review_group(duplicate_pair, 1, 1, quarantine)

        assert outcome.decision is ReviewDecision.SKIPPED
        assert all(path.exists() for path in duplicate_pair.paths)

    def test_selecting_every_copy_warns(self, duplicate_pair, quarantine, volume):
        ui, output = make_ui("0 1\ny\n")

        outcome = ui.review_group(duplicate_pair, 1, 1, quarantine)

        assert "Every copy" in output.getvalue()
        assert [r.relocated for r in outcome.results] == [True, True]

    def test_failed_relocation_does_not_stop_others(self, duplicate_pair, quarantine):
        a, b = duplicate_pair.paths
        a.unlink()
        ui, output = make_ui("0,1\ny\n")

        outcome = ui.review_group(duplicate_pair, 1, 1, quarantine)

        assert [r.relocated for r in outcome.results] == [False, True]
        assert not b.exists()
        assert "does not exist" in output.getvalue()


class TestReviewDuplicates:
    """Test the whole review session."""

    def test_groups_reviewed_in_digest_order(self, make_file, quarantine):
        groups = []
        for text in ["one", "two", "six"]:
            paths = [make_file(f"{text}/{n}.txt", text) for n in range(2)]
            digest = hashlib.sha256(text.encode()).hexdigest()
            groups.append(DuplicateGroup(digest=digest, size=3, paths=paths))
        ui, _ = make_ui("\n\n\n")

        outcomes = ui.review_duplicates(list(reversed(groups)), quarantine)

        digests = [o.group.digest for o in outcomes]
        assert digests == sorted(g.digest for g in groups)
        assert all(o.decision is ReviewDecision.SKIPPED for o in outcomes)

    def test_show_summary(self, duplicate_pair, quarantine):
        ui, output = make_ui("1\ny\n")
        outcomes = ui.review_duplicates([duplicate_pair], quarantine)

        ui.show_summary(outcomes)

        text = output.getvalue()
        assert "Review Summary" in text
        assert "Files quarantined" in text
