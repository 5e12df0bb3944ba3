"""Business logic services for deployment planning."""

import logging
from collections import Counter
from collections.abc import Iterable

from assetprep.domain.models import Action, ActionPlan, RemoteObject
from assetprep.files.file import File

logger = logging.getLogger(__name__)


class ActionPlanService:
    """Service for deciding what to do with each prepared file."""

    @staticmethod
    def plan(
        files: Iterable[File],
        remote: dict[str, RemoteObject] | None = None,
        delete_orphans: bool = False,
    ) -> ActionPlan:
        """Compare ready local files against remote state.

        Args:
            files: Ready files, typically a FileCollection after strategies
            remote: Remote objects keyed by path (empty means nothing deployed)
            delete_orphans: Delete remote paths that have no local file

        Returns:
            ActionPlan with actions sorted by path:
                - upload when the object is missing or md5 / size differ
                - headers when content matches but Content-Type differs
                - delete for orphans when requested

            Files sharing a path each get their own action, in input order
            for equal paths. A transport applying the plan keeps the last
            upload for that key, so a warning is logged when this happens.
        """
        remote = remote or {}
        actions = []
        unchanged = []
        path_counts: Counter[str] = Counter()

        for file in files:
            path_counts[file.path] += 1
            existing = remote.get(file.path)

            if existing is None or existing.md5 != file.md5 or existing.size != file.size:
                actions.append(Action(file=file, do_upload=True))
            elif existing.content_type is not None and existing.content_type != file.mime:
                actions.append(Action(file=file, do_headers=True))
            else:
                unchanged.append(file.path)

        duplicates = sorted(path for path, count in path_counts.items() if count > 1)
        if duplicates:
            logger.warning(
                f"{len(duplicates)} path(s) have more than one file, later uploads overwrite earlier ones: "
                f"{', '.join(duplicates[:10])}"
            )

        if delete_orphans:
            for path in remote:
                if path not in path_counts:
                    actions.append(Action(path=path, do_delete=True))

        actions.sort(key=lambda action: action.path)
        unchanged.sort()
        return ActionPlan(actions=actions, unchanged=unchanged)
