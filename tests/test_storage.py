"""Tests for JSON tree storage."""

import pytest

from locale_sync.core.errors import SyncError, TreeFileError, TreeWriteError
from locale_sync.core.storage import dump_tree, load_tree, save_tree


class TestLoadTree:
    def test_loads_object(self, tmp_path, write_json) -> None:
        path = write_json(tmp_path / "en.json", {"a": "b"})
        assert load_tree(path) == {"a": "b"}

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(TreeFileError) as exc:
            load_tree(tmp_path / "missing.json")

        assert exc.value.path == tmp_path / "missing.json"
        assert "missing.json" in str(exc.value)

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"a": ', encoding="utf-8")

        with pytest.raises(TreeFileError, match="invalid JSON"):
            load_tree(path)

    @pytest.mark.parametrize("payload", ["[]", '"text"', "null", "3"])
    def test_non_object_rejected(self, tmp_path, payload) -> None:
        path = tmp_path / "odd.json"
        path.write_text(payload, encoding="utf-8")

        with pytest.raises(TreeFileError, match="expected a JSON object"):
            load_tree(path)

    def test_invalid_utf8(self, tmp_path) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"title": "\xff\xfe"}')

        with pytest.raises(TreeFileError, match="not valid UTF-8") as exc:
            load_tree(path)

        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_error_is_a_sync_error(self, tmp_path) -> None:
        with pytest.raises(SyncError):
            load_tree(tmp_path / "nope.json")


class TestSaveTree:
    def test_sorted_two_space_output(self, tmp_path) -> None:
        path = tmp_path / "it.json"
        save_tree(path, {"b": {"d": "4", "c": "3"}, "a": "1"})

        assert path.read_text(encoding="utf-8") == (
            '{\n'
            '  "a": "1",\n'
            '  "b": {\n'
            '    "c": "3",\n'
            '    "d": "4"\n'
            '  }\n'
            '}'
        )

    def test_unicode_written_verbatim(self, tmp_path) -> None:
        path = tmp_path / "fr.json"
        save_tree(path, {"greeting": "Héllo – ça va?"})

        assert "Héllo – ça va?" in path.read_text(encoding="utf-8")

    def test_does_not_reorder_callers_tree(self, tmp_path) -> None:
        tree = {"b": "2", "a": "1"}
        save_tree(tmp_path / "x.json", tree)
        assert list(tree) == ["b", "a"]

    def test_write_failure_raises_sync_error(self, tmp_path) -> None:
        path = tmp_path / "gone" / "it.json"

        with pytest.raises(TreeWriteError, match="Error writing file") as exc:
            save_tree(path, {"a": "1"})

        assert isinstance(exc.value, SyncError)
        assert exc.value.path == path

    def test_empty_tree(self) -> None:
        assert dump_tree({}) == "{}"

    def test_round_trip(self, tmp_path) -> None:
        path = tmp_path / "pt.json"
        tree = {"a": {"b": ["x", "y"], "c": None}}
        save_tree(path, tree)
        assert load_tree(path) == tree
