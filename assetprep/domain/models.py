"""Domain models for deployment planning."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from assetprep.files.file import File


class Action(BaseModel):
    """What a transport should do with one path."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    file: File | None = None
    path: str = ""  # Taken from file.path when a File is given
    do_upload: bool = False
    do_headers: bool = False
    do_delete: bool = False

    @model_validator(mode="before")
    @classmethod
    def path_from_file(cls, data: Any) -> Any:
        """Use the File's path as the action path."""
        if isinstance(data, dict) and isinstance(data.get("file"), File):
            data = {**data, "path": data["file"].path}
        return data

    @model_validator(mode="after")
    def check_intents(self) -> "Action":
        """Reject intents that the given file / path cannot satisfy."""
        if self.do_delete and not self.path:
            raise ValueError("cannot do_delete without file / path")
        if self.file is None:
            if self.do_upload:
                raise ValueError("cannot do_upload without file")
            if self.do_headers:
                raise ValueError("cannot do_headers without file")
        return self

    def to_manifest_entry(self) -> dict[str, Any]:
        """Return a JSON-ready description of the action."""
        entry: dict[str, Any] = {
            "path": self.path,
            "upload": self.do_upload,
            "headers": self.do_headers,
            "delete": self.do_delete,
        }
        if self.file is not None:
            entry["file"] = {
                "local_path": str(self.file.local_path) if self.file.local_path else None,
                "md5": self.file.md5,
                "mime": self.file.mime,
                "size": self.file.size,
                "encoding": getattr(self.file, "encoding", None),
                "headers": dict(self.file.headers),
            }
        return entry


class RemoteObject(BaseModel):
    """Metadata of an object already present in remote storage."""

    md5: str
    size: int
    content_type: str | None = None


class RemoteListing(BaseModel):
    """Remote objects keyed by path."""

    objects: dict[str, RemoteObject] = Field(default_factory=dict)


class ActionPlan(BaseModel):
    """Actions needed to bring remote storage in line with local files."""

    actions: list[Action] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)

    @property
    def uploads(self) -> list[Action]:
        """Return actions that upload content."""
        return [a for a in self.actions if a.do_upload]

    @property
    def header_updates(self) -> list[Action]:
        """Return actions that only update headers."""
        return [a for a in self.actions if a.do_headers and not a.do_upload]

    @property
    def deletes(self) -> list[Action]:
        """Return actions that delete remote objects."""
        return [a for a in self.actions if a.do_delete]

    @property
    def has_changes(self) -> bool:
        """Return True if any action is pending."""
        return bool(self.actions)

    def __repr__(self) -> str:
        """Return string representation of the plan."""
        return (
            f"ActionPlan("
            f"upload={len(self.uploads)}, "
            f"headers={len(self.header_updates)}, "
            f"delete={len(self.deletes)}, "
            f"unchanged={len(self.unchanged)})"
        )
