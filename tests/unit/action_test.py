"""Tests for Action validation and action planning."""

import pytest
from pydantic import ValidationError

from assetprep.domain import Action, ActionPlanService, RemoteObject
from assetprep.files import File


def _file(path, md5="aaa", size=10, mime="text/html"):
    return File(path=path, mime=mime, md5=md5, size=size)


class TestAction:
    """Test Action construction rules."""

    def test_path_taken_from_file(self):
        """The File's path wins over an explicit path."""
        action = Action(file=_file("index.html"), path="other", do_upload=True)
        assert action.path == "index.html"
        assert action.do_upload
        assert not action.do_headers
        assert not action.do_delete

    def test_delete_with_bare_path(self):
        """Deletes only need a path."""
        action = Action(path="old.css", do_delete=True)
        assert action.file is None
        assert action.path == "old.css"

    def test_delete_without_path_fails(self):
        """Deleting needs a path."""
        with pytest.raises(ValidationError, match="do_delete"):
            Action(do_delete=True)

    @pytest.mark.parametrize("intent", ["do_upload", "do_headers"])
    def test_upload_or_headers_without_file_fails(self, intent):
        """Uploads and header updates need a File, a path is not enough."""
        with pytest.raises(ValidationError, match=intent):
            Action(path="index.html", **{intent: True})

    def test_no_intents_is_valid(self):
        """An action with no intents is allowed."""
        assert Action().path == ""

    def test_frozen(self):
        """Actions cannot be modified after construction."""
        action = Action(path="a", do_delete=True)
        with pytest.raises(ValidationError):
            action.do_delete = False

    def test_manifest_entry(self):
        """File details are included in the manifest entry."""
        entry = Action(file=_file("index.html"), do_upload=True).to_manifest_entry()
        assert entry["path"] == "index.html"
        assert entry["upload"] is True
        assert entry["file"]["md5"] == "aaa"
        assert entry["file"]["headers"] == {"Content-Type": "text/html"}
        assert entry["file"]["local_path"] is None


class TestActionPlanService:
    """Test comparison of local files against remote state."""

    def test_everything_uploaded_without_remote(self):
        """With no remote state every file is uploaded."""
        plan = ActionPlanService.plan([_file("b.html"), _file("a.html")])
        assert [a.path for a in plan.uploads] == ["a.html", "b.html"]
        assert plan.unchanged == []
        assert plan.has_changes

    def test_changed_content_uploaded(self):
        """MD5 or size differences trigger an upload."""
        remote = {
            "md5.html": RemoteObject(md5="old", size=10),
            "size.html": RemoteObject(md5="aaa", size=11),
        }
        plan = ActionPlanService.plan([_file("md5.html"), _file("size.html")], remote)
        assert [a.path for a in plan.uploads] == ["md5.html", "size.html"]

    def test_content_type_mismatch_updates_headers(self):
        """Same content but a different Content-Type only updates headers."""
        remote = {"a.html": RemoteObject(md5="aaa", size=10, content_type="text/plain")}
        plan = ActionPlanService.plan([_file("a.html")], remote)
        assert [a.path for a in plan.header_updates] == ["a.html"]
        assert plan.uploads == []

    def test_unchanged_files(self):
        """Matching objects need no action."""
        remote = {"a.html": RemoteObject(md5="aaa", size=10, content_type="text/html")}
        plan = ActionPlanService.plan([_file("a.html")], remote)
        assert plan.actions == []
        assert plan.unchanged == ["a.html"]
        assert not plan.has_changes

    def test_orphans_deleted_only_on_request(self):
        """Remote paths without a local file are deleted when asked."""
        remote = {"gone.js": RemoteObject(md5="x", size=1)}

        kept = ActionPlanService.plan([_file("a.html")], remote)
        assert kept.deletes == []

        pruned = ActionPlanService.plan([_file("a.html")], remote, delete_orphans=True)
        assert [a.path for a in pruned.deletes] == ["gone.js"]
        assert pruned.deletes[0].file is None

    def test_duplicate_paths_warn(self, caplog):
        """Two files for one path both get actions and a warning is logged."""
        plain = _file("style.css", md5="plain")
        compressed = _file("style.css", md5="compressed")

        with caplog.at_level("WARNING", logger="assetprep.domain.services"):
            plan = ActionPlanService.plan([plain, compressed])

        assert [a.file for a in plan.uploads] == [plain, compressed]
        assert "style.css" in caplog.text

    def test_unique_paths_do_not_warn(self, caplog):
        """No warning when every path is distinct."""
        with caplog.at_level("WARNING", logger="assetprep.domain.services"):
            ActionPlanService.plan([_file("a.html"), _file("b.html")])

        assert caplog.records == []

    def test_repr(self):
        """The plan summarises its buckets."""
        plan = ActionPlanService.plan([_file("a.html")])
        assert repr(plan) == "ActionPlan(upload=1, headers=0, delete=0, unchanged=0)"
