"""Remote listing input and action manifest output."""

import logging
from pathlib import Path
from typing import Any

import orjson
from atomicwrites import atomic_write

from assetprep.domain.models import ActionPlan, RemoteListing, RemoteObject

logger = logging.getLogger(__name__)


def _sanitize_listing(payload: Any) -> dict[str, Any]:
    """Accept both ``{"objects": {...}}`` and a bare path mapping."""
    if not isinstance(payload, dict):
        raise ValueError("remote listing must be a JSON object")
    if isinstance(payload.get("objects"), dict):
        return payload
    return {"objects": payload}


def load_remote_listing(path: str | Path) -> dict[str, RemoteObject]:
    """Load remote object metadata from a JSON file.

    Args:
        path: JSON file mapping object paths to ``{"md5", "size", "content_type"}``

    Returns:
        Remote objects keyed by path

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON or fails validation
    """
    path = Path(path)
    try:
        payload = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        logger.error(f"Failed to parse remote listing {path}: {e}")
        raise
    except OSError as e:
        logger.error(f"Failed to read remote listing {path}: {e}")
        raise

    listing = RemoteListing.model_validate(_sanitize_listing(payload))
    logger.debug(f"Loaded {len(listing.objects)} remote objects from {path}")
    return listing.objects


def write_manifest(plan: ActionPlan, path: str | Path) -> Path:
    """Write the plan's actions to a JSON manifest atomically.

    Args:
        plan: Plan to serialise
        path: Destination file, parent directories are created

    Returns:
        The manifest path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = orjson.dumps(
        {
            "actions": [action.to_manifest_entry() for action in plan.actions],
            "unchanged": plan.unchanged,
        },
        option=orjson.OPT_INDENT_2,
    )
    try:
        with atomic_write(path, mode="wb", overwrite=True) as f:
            f.write(payload)
            f.write(b"\n")
    except OSError as e:
        logger.error(f"Failed to write manifest {path}: {e}")
        raise

    logger.info(f"Wrote {len(plan.actions)} actions to {path}")
    return path
