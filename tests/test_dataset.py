"""Unit tests for SketchFolderDataset and load_dataset."""

from pathlib import Path

import pytest
import torch
from PIL import Image

from sketch_recognition.data.dataset import (
    SketchFolderDataset,
    decode_image,
    load_dataset,
    one_hot,
)
from sketch_recognition.errors import DatasetError, DecodeError


class TestOneHot:
    def test_single_one(self) -> None:
        vec = one_hot(2, 4)
        assert vec.tolist() == [0.0, 0.0, 1.0, 0.0]
        assert vec.dtype == torch.float32

    @pytest.mark.parametrize("index", [-1, 3])
    def test_out_of_range(self, index: int) -> None:
        with pytest.raises(ValueError):
            one_hot(index, 3)


class TestLoadDataset:
    def test_len_and_labels(self, tmp_dataset_dir: Path) -> None:
        ds, labels = load_dataset(tmp_dataset_dir, (16, 16))
        assert len(ds) == 6
        assert labels == ["alpha", "beta", "gamma"]
        assert ds.label_names == labels
        assert ds.num_classes == 3

    def test_images_resized_and_normalized(self, tmp_dataset_dir: Path) -> None:
        ds, _ = load_dataset(tmp_dataset_dir, (16, 24))
        for image, _ in ds:
            assert image.shape == (1, 16, 24)
            assert image.min() >= 0.0
            assert image.max() <= 1.0

    def test_labels_are_one_hot_at_folder_index(
        self, tmp_dataset_dir: Path
    ) -> None:
        ds, labels = load_dataset(tmp_dataset_dir, (8, 8))
        for (_, target), path in zip(ds.samples, ds.paths, strict=True):
            assert target.shape == (len(labels),)
            assert target.sum() == 1.0
            assert set(target.unique().tolist()) <= {0.0, 1.0}
            assert labels[int(target.argmax())] == path.parent.name

    def test_samples_grouped_in_label_order(self, tmp_dataset_dir: Path) -> None:
        ds, _ = load_dataset(tmp_dataset_dir, (8, 8))
        indices = [int(target.argmax()) for _, target in ds.samples]
        assert indices == [0, 0, 1, 1, 2, 2]
        assert [p.name for p in ds.paths[:2]] == ["img_00.png", "img_01.png"]

    def test_pixel_values_follow_source(self, tmp_dataset_dir: Path) -> None:
        ds, _ = load_dataset(tmp_dataset_dir, (8, 8))
        image, _ = ds[0]  # alpha, shade 40
        assert torch.allclose(image, torch.full((1, 8, 8), 40 / 255), atol=1 / 255)

    def test_class_counts(self, tmp_dataset_dir: Path) -> None:
        ds = SketchFolderDataset(tmp_dataset_dir, (8, 8))
        assert ds.class_counts() == {0: 2, 1: 2, 2: 2}

    def test_empty_label_folder_keeps_label(self, tmp_dataset_dir: Path) -> None:
        (tmp_dataset_dir / "delta").mkdir()
        ds, labels = load_dataset(tmp_dataset_dir, (8, 8))
        assert labels == ["alpha", "beta", "delta", "gamma"]
        assert ds.class_counts()[2] == 0
        for _, target in ds:
            assert target.shape == (4,)

    def test_files_at_root_are_ignored(self, tmp_dataset_dir: Path) -> None:
        Image.new("RGB", (8, 8)).save(tmp_dataset_dir / "stray.png")
        _, labels = load_dataset(tmp_dataset_dir, (8, 8))
        assert labels == ["alpha", "beta", "gamma"]


class TestLoadDatasetErrors:
    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope", (8, 8))

    def test_root_is_file(self, tmp_path: Path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(NotADirectoryError):
            load_dataset(path, (8, 8))

    def test_no_label_folders(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetError, match="No label folders"):
            load_dataset(tmp_path, (8, 8))

    def test_dataset_error_is_oserror(self) -> None:
        assert issubclass(DatasetError, OSError)

    def test_undecodable_file_aborts_load(self, tmp_dataset_dir: Path) -> None:
        (tmp_dataset_dir / "beta" / "notes.txt").write_text("not an image")
        with pytest.raises(DecodeError, match="notes.txt"):
            load_dataset(tmp_dataset_dir, (8, 8))

    def test_decode_error_chains_cause(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"\x89PNG garbage")
        with pytest.raises(DecodeError) as excinfo:
            decode_image(bad)
        assert excinfo.value.__cause__ is not None

    def test_unlistable_label_folder(
        self, tmp_dataset_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        real_iterdir = Path.iterdir

        def iterdir(self: Path):  # noqa: ANN202
            if self.name == "beta":
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)
        with pytest.raises(DatasetError, match="beta"):
            load_dataset(tmp_dataset_dir, (8, 8))

    def test_oversized_image_is_decode_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "big.png"
        Image.new("L", (32, 32)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        with pytest.raises(DecodeError, match="big.png"):
            decode_image(path)
