"""
Tests for IndexCommand and ActionCommand — the workflows shared by the CLI and library callers.
"""
import os
import pytest
from pathlib import Path
from unittest import mock
from fsum.commands import ActionCommand, IndexCommand
from fsum.core.codec import export_to_file, import_from_file
from fsum.core.errors import AlgorithmMismatchError, CrawlError, IndexDecodeError, OutputConflictError
from fsum.core.models import ActionMode, ActionParams, ChecksumIndex, Fingerprint, IndexParams
from fsum.services.deletion_service import DeletionService


@pytest.fixture
def photo_tree(temp_dir):
    """Two directory trees: photos (with an internal duplicate) and backup (one copy of a photo)."""
    photos = temp_dir / "photos"
    backup = temp_dir / "backup"
    photos.mkdir()
    backup.mkdir()
    (photos / "a.jpg").write_bytes(b"sunset")
    (photos / "b.jpg").write_bytes(b"sunset")
    (photos / "c.jpg").write_bytes(b"beach")
    (backup / "old_a.jpg").write_bytes(b"sunset")
    (backup / "x.jpg").write_bytes(b"mountain")
    out = temp_dir / "out"
    out.mkdir()
    return photos, backup, out


class TestIndexCommand:

    def test_writes_one_file_per_root(self, photo_tree):
        photos, backup, out = photo_tree
        results = IndexCommand().execute(IndexParams([str(photos), str(backup)], output_dir=str(out)))

        assert [r.output_path for r in results] == [
            os.path.join(str(out), "photos.fsum"),
            os.path.join(str(out), "backup.fsum"),
        ]
        for result in results:
            assert import_from_file(result.output_path) == result.index

    def test_exported_index_describes_tree(self, photo_tree):
        photos, _, out = photo_tree
        result, = IndexCommand().execute(IndexParams([str(photos)], algorithm="MD5", output_dir=str(out)))

        assert result.index.algorithm == "MD5"
        assert result.index.paths() == [str(photos / n) for n in ("a.jpg", "b.jpg", "c.jpg")]
        assert result.index.get(str(photos / "a.jpg")) == result.index.get(str(photos / "b.jpg"))
        assert result.index.total_size() == 17

    def test_trailing_separator_keeps_directory_name(self, photo_tree):
        photos, _, out = photo_tree
        assert IndexCommand.output_path(str(photos) + os.sep, str(out)) == os.path.join(str(out), "photos.fsum")

    def test_invalid_root_fails_before_any_output(self, photo_tree):
        photos, _, out = photo_tree
        with pytest.raises(CrawlError, match="not a directory"):
            IndexCommand().execute(IndexParams([str(photos), str(out / "missing")], output_dir=str(out)))
        assert not (out / "photos.fsum").exists()

    def test_roots_with_same_name_are_rejected_before_any_output(self, photo_tree, temp_dir):
        photos, _, out = photo_tree
        other = temp_dir / "elsewhere" / "photos"
        other.mkdir(parents=True)
        (other / "z.jpg").write_bytes(b"other")

        with pytest.raises(OutputConflictError, match="photos.fsum"):
            IndexCommand().execute(IndexParams([str(photos), str(other)], output_dir=str(out)))
        assert not (out / "photos.fsum").exists()

    def test_progress_callbacks_are_forwarded(self, photo_tree):
        photos, _, out = photo_tree
        totals, processed = [], []

        IndexCommand().execute(
            IndexParams([str(photos)], output_dir=str(out)),
            on_total_size=totals.append,
            on_file_processed=lambda path, size: processed.append(size)
        )

        assert totals == [17]
        assert sum(processed) == 17


class TestActionCommand:

    @pytest.fixture
    def indexes(self, temp_dir, index_a, baseline_b):
        working = temp_dir / "a.fsum"
        against = temp_dir / "b.fsum"
        export_to_file(index_a, working)
        export_to_file(baseline_b, against)
        return str(working), str(against)

    @pytest.mark.parametrize("mode, expected", [
        (ActionMode.DISTINCT, ["f1", "f3"]),
        (ActionMode.DUPLICATE, ["f2"]),
        (ActionMode.UNIQUE, ["f3"]),
    ])
    def test_single_index_modes(self, indexes, mode, expected):
        working, _ = indexes
        result = ActionCommand().execute(ActionParams(mode, working))

        assert result.output_path == working[:-len(".fsum")] + f"-{mode.value}.fsum"
        assert import_from_file(result.output_path).paths() == expected
        assert result.report is None

    @pytest.mark.parametrize("mode, expected", [
        (ActionMode.DISTINCT, ["f3"]),
        (ActionMode.DUPLICATE, ["f1", "f2"]),
        (ActionMode.UNIQUE, ["f3"]),
    ])
    def test_modes_against_second_index(self, indexes, mode, expected):
        working, against = indexes
        result = ActionCommand().execute(ActionParams(mode, working, against))
        assert result.index.paths() == expected

    def test_explicit_self_comparison_equals_single_index(self, indexes):
        working, _ = indexes
        explicit = ActionCommand().execute(ActionParams(ActionMode.DUPLICATE, working, working))
        assert explicit.index.paths() == ["f2"]

    def test_inputs_are_left_untouched(self, indexes):
        working, against = indexes
        before = Path(working).read_bytes(), Path(against).read_bytes()
        ActionCommand().execute(ActionParams(ActionMode.DISTINCT, working, against))
        assert (Path(working).read_bytes(), Path(against).read_bytes()) == before

    def test_output_dir(self, indexes, temp_dir):
        working, _ = indexes
        out = temp_dir / "results"
        out.mkdir()
        result = ActionCommand().execute(ActionParams(ActionMode.UNIQUE, working, output_dir=str(out)))
        assert result.output_path == os.path.join(str(out), "a-unique.fsum")
        assert os.path.isfile(result.output_path)

    def test_algorithm_mismatch(self, indexes, temp_dir):
        working, _ = indexes
        md5 = temp_dir / "md5.fsum"
        export_to_file(ChecksumIndex("MD5", {"g": Fingerprint(10, "aaa")}), md5)

        with pytest.raises(AlgorithmMismatchError):
            ActionCommand().execute(ActionParams(ActionMode.DISTINCT, working, str(md5)))
        assert not os.path.exists(working[:-len(".fsum")] + "-distinct.fsum")

    def test_malformed_input(self, temp_dir):
        broken = temp_dir / "broken.fsum"
        broken.write_bytes(b"SHA-256\nlots\n")
        with pytest.raises(IndexDecodeError):
            ActionCommand().execute(ActionParams(ActionMode.DISTINCT, str(broken)))


class TestDeleteAction:

    def test_deletes_duplicates_found_against_other_tree(self, photo_tree):
        """The classic workflow: index both trees, find backup copies, delete them."""
        photos, backup, out = photo_tree
        IndexCommand().execute(IndexParams([str(photos), str(backup)], output_dir=str(out)))
        photos_fsum = str(out / "photos.fsum")
        backup_fsum = str(out / "backup.fsum")

        dups = ActionCommand().execute(ActionParams(ActionMode.DUPLICATE, backup_fsum, photos_fsum))
        assert dups.index.paths() == [str(backup / "old_a.jpg")]

        deleted = []
        result = ActionCommand().execute(
            ActionParams(ActionMode.DELETE, backup_fsum, dups.output_path),
            on_deleted=deleted.append
        )

        assert deleted == [str(backup / "old_a.jpg")]
        assert not (backup / "old_a.jpg").exists()
        assert (backup / "x.jpg").exists()
        assert (photos / "a.jpg").exists()
        assert result.output_path == str(out / "backup-delete.fsum")
        assert import_from_file(result.output_path).paths() == [str(backup / "x.jpg")]
        assert result.report.deleted == deleted

    def test_total_reported_before_first_deletion(self, photo_tree):
        photos, _, out = photo_tree
        IndexCommand().execute(IndexParams([str(photos)], output_dir=str(out)))
        events = []

        ActionCommand().execute(
            ActionParams(ActionMode.DELETE, str(out / "photos.fsum")),
            on_deleted=lambda path: events.append("deleted"),
            on_total=lambda total: events.append(total)
        )

        assert events == [3, "deleted", "deleted", "deleted"]

    def test_no_total_for_derived_modes(self, photo_tree):
        photos, _, out = photo_tree
        IndexCommand().execute(IndexParams([str(photos)], output_dir=str(out)))
        totals = []
        ActionCommand().execute(ActionParams(ActionMode.UNIQUE, str(out / "photos.fsum")), on_total=totals.append)
        assert totals == []

    def test_self_delete_empties_index(self, photo_tree):
        photos, _, out = photo_tree
        IndexCommand().execute(IndexParams([str(photos)], output_dir=str(out)))
        working = str(out / "photos.fsum")

        result = ActionCommand().execute(ActionParams(ActionMode.DELETE, working))

        assert len(result.index) == 0
        assert list(photos.iterdir()) == []
        assert len(import_from_file(working)) == 3, "Input file is not rewritten"

    def test_uses_injected_deletion_service_and_trash_flag(self, photo_tree):
        photos, _, out = photo_tree
        IndexCommand().execute(IndexParams([str(photos)], output_dir=str(out)))
        working = str(out / "photos.fsum")

        with mock.patch("fsum.commands.DeletionService") as service_cls:
            service_cls.return_value.apply_deletion.return_value = None
            ActionCommand().execute(ActionParams(ActionMode.DELETE, working, use_trash=True))

        service_cls.assert_called_once_with(use_trash=True)

        service = mock.Mock(spec=DeletionService)
        ActionCommand(deletion_service=service).execute(ActionParams(ActionMode.DELETE, working))
        service.apply_deletion.assert_called_once()
