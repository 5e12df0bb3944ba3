"""End-to-end tests of the preparation workflow."""

import gzip

from assetprep import Preparation, Reporter, Settings, prepare_directory, scan_directory
from assetprep.domain import RemoteObject


def test_prepare_directory_with_gzip(asset_tree, tmp_path):
    """Gzip output is staged, planned and decompresses to the source."""
    config = Settings(strategies=["gzip"], staging_dir=tmp_path / "staging")

    plan = prepare_directory(asset_tree, config)

    assert [a.path for a in plan.uploads] == ["a.txt", "sub/b.txt"]
    for action in plan.uploads:
        file = action.file
        assert file.local_path.is_relative_to((tmp_path / "staging").resolve())
        assert file.headers["Content-Type"] == "application/gzip"
        assert gzip.decompress(file.local_path.read_bytes()) == (asset_tree / action.path).read_bytes()


def test_second_run_is_unchanged(asset_tree, tmp_path):
    """Feeding the first plan back as remote state yields no changes."""
    config = Settings(strategies=["clone"], staging_dir=tmp_path / "staging")
    orchestrator = Preparation(config)

    first = orchestrator.prepare(asset_tree, reporter=Reporter(silent=True))
    remote = {
        a.path: RemoteObject(md5=a.file.md5, size=a.file.size, content_type=a.file.mime)
        for a in first.uploads
    }
    second = orchestrator.prepare(asset_tree, remote=remote)

    assert second.actions == []
    assert second.unchanged == ["a.txt", "sub/b.txt"]


def test_manifest_written(asset_tree, tmp_path):
    """The orchestrator writes the manifest when asked."""
    manifest = tmp_path / "manifest.json"

    prepare_directory(asset_tree, Settings(staging_dir=tmp_path / "staging"), manifest_path=manifest)

    assert manifest.exists()


def test_scan_directory(asset_tree):
    """Scanning returns ready files."""
    files = scan_directory(asset_tree, Settings(max_hash_workers=1))

    assert files.paths == ["a.txt", "sub/b.txt"]
    assert all(file.md5 and file.mime for file in files)


def test_rich_reporter_output(asset_tree, tmp_path, capsys):
    """A non-silent reporter prints scan and plan summaries."""
    reporter = Reporter()

    Preparation(Settings(staging_dir=tmp_path / "staging")).prepare(asset_tree, reporter=reporter)

    output = capsys.readouterr().out
    assert "Found 2 files" in output
    assert "Upload: 2" in output
