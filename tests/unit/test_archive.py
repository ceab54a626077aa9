"""Tests for the archive builder — relative paths, sorted entries, errors."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from panelpress.deploy.archive import ArchiveBuilder
from panelpress.errors import ArchiveError, SourceNotFoundError


def _names(archive: Path) -> list[str]:
    with zipfile.ZipFile(archive) as bundle:
        return bundle.namelist()


class TestArchiveBuilder:
    def test_entries_are_relative_to_source(self, tmp_path: Path):
        source = tmp_path / "out"
        (source / "sub").mkdir(parents=True)
        (source / "a.txt").write_text("alpha", encoding="utf-8")
        (source / "sub" / "b.txt").write_text("beta", encoding="utf-8")

        ArchiveBuilder(source).build(tmp_path / "bundle.zip")

        assert sorted(_names(tmp_path / "bundle.zip")) == ["a.txt", "sub/b.txt"]

    def test_bundle_report(self, site_dir: Path, tmp_path: Path):
        bundle = ArchiveBuilder(site_dir).build(tmp_path / "bundle.zip")

        assert bundle.path == tmp_path / "bundle.zip"
        assert bundle.file_count == 3
        expected = sum(p.stat().st_size for p in site_dir.rglob("*") if p.is_file())
        assert bundle.uncompressed_bytes == expected
        assert bundle.compressed_bytes == (tmp_path / "bundle.zip").stat().st_size

    def test_contents_round_trip(self, site_dir: Path, tmp_path: Path):
        ArchiveBuilder(site_dir).build(tmp_path / "bundle.zip")
        with zipfile.ZipFile(tmp_path / "bundle.zip") as bundle:
            assert bundle.read("css/site.css") == b"body { margin: 0; }"
            assert bundle.getinfo("index.html").compress_type == zipfile.ZIP_DEFLATED

    def test_entry_set_is_reproducible(self, site_dir: Path, tmp_path: Path):
        ArchiveBuilder(site_dir).build(tmp_path / "one.zip")
        ArchiveBuilder(site_dir).build(tmp_path / "two.zip")
        assert _names(tmp_path / "one.zip") == _names(tmp_path / "two.zip")

    def test_source_name_not_a_prefix(self, site_dir: Path, tmp_path: Path):
        ArchiveBuilder(site_dir).build(tmp_path / "bundle.zip")
        assert not any(n.startswith("_site") for n in _names(tmp_path / "bundle.zip"))

    def test_empty_directory_kept(self, site_dir: Path, tmp_path: Path):
        (site_dir / "images").mkdir()
        ArchiveBuilder(site_dir).build(tmp_path / "bundle.zip")
        assert "images/" in _names(tmp_path / "bundle.zip")

    def test_archive_inside_source_is_skipped(self, site_dir: Path):
        archive = site_dir / "site-bundle.zip"
        bundle = ArchiveBuilder(site_dir).build(archive)
        assert "site-bundle.zip" not in _names(archive)
        assert bundle.file_count == 3

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(SourceNotFoundError) as exc_info:
            ArchiveBuilder(tmp_path / "nope").build(tmp_path / "bundle.zip")
        assert exc_info.value.path == tmp_path / "nope"
        assert not (tmp_path / "bundle.zip").exists()

    def test_unwritable_target_is_archive_error(self, site_dir: Path, tmp_path: Path):
        target = tmp_path / "missing-dir" / "bundle.zip"
        with pytest.raises(ArchiveError):
            ArchiveBuilder(site_dir).build(target)
        assert not target.exists()
