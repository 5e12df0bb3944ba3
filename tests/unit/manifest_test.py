"""Tests for remote listing and manifest I/O."""

import orjson
import pytest

from assetprep.domain import ActionPlanService, RemoteObject
from assetprep.files import File
from assetprep.manifest import load_remote_listing, write_manifest


class TestLoadRemoteListing:
    """Test reading remote object metadata."""

    def test_bare_mapping(self, tmp_path):
        """A plain path mapping is accepted."""
        listing = tmp_path / "remote.json"
        listing.write_bytes(
            orjson.dumps({"index.html": {"md5": "abc", "size": 3, "content_type": "text/html"}})
        )

        objects = load_remote_listing(listing)

        assert objects == {"index.html": RemoteObject(md5="abc", size=3, content_type="text/html")}

    def test_wrapped_mapping(self, tmp_path):
        """An ``objects`` wrapper is accepted as well."""
        listing = tmp_path / "remote.json"
        listing.write_bytes(orjson.dumps({"objects": {"a.css": {"md5": "x", "size": 1}}}))

        assert load_remote_listing(listing)["a.css"].content_type is None

    def test_invalid_json(self, tmp_path):
        """Malformed JSON raises a ValueError."""
        listing = tmp_path / "remote.json"
        listing.write_text("{not json")

        with pytest.raises(ValueError):
            load_remote_listing(listing)

    def test_invalid_entry(self, tmp_path):
        """Entries missing required fields fail validation."""
        listing = tmp_path / "remote.json"
        listing.write_bytes(orjson.dumps({"a.css": {"size": 1}}))

        with pytest.raises(ValueError):
            load_remote_listing(listing)

    def test_missing_file(self, tmp_path):
        """Missing listings raise OSError."""
        with pytest.raises(OSError):
            load_remote_listing(tmp_path / "missing.json")


class TestWriteManifest:
    """Test manifest output."""

    def test_writes_actions(self, tmp_path):
        """Actions and unchanged paths are serialised."""
        files = [
            File(path="a.html", mime="text/html", md5="aaa", size=1),
            File(path="b.html", mime="text/html", md5="bbb", size=2),
        ]
        remote = {
            "b.html": RemoteObject(md5="bbb", size=2),
            "old.js": RemoteObject(md5="x", size=1),
        }
        plan = ActionPlanService.plan(files, remote, delete_orphans=True)

        path = write_manifest(plan, tmp_path / "out" / "manifest.json")
        payload = orjson.loads(path.read_bytes())

        assert [a["path"] for a in payload["actions"]] == ["a.html", "old.js"]
        assert payload["actions"][0]["upload"] is True
        assert payload["actions"][1]["delete"] is True
        assert "file" not in payload["actions"][1]
        assert payload["unchanged"] == ["b.html"]
