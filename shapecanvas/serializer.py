# shapecanvas/serializer.py
"""
Conversion scène <-> document JSON, utilisée pour l'export/import de
fichiers et pour le serveur de peintures.
"""

import json
import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .errors import InvalidFormatError
from .shapes import Shape

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"
DEFAULT_NAME = "My Painting"
# ids a document may carry (JSON scalars)
ID_TYPES = (str, int, float)


@dataclass
class Scene:
    name: str
    shapes: list = field(default_factory=list)
    timestamp: str = None
    format_version: str = FORMAT_VERSION


def capture_scene(name, repository) -> Scene:
    """Snapshot of the live repository, detached from later edits."""
    shapes = [Shape.from_dict(s.to_dict()) for s in repository]
    return Scene(name=name, shapes=shapes)


def to_document(scene: Scene, now: datetime = None) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "name": scene.name,
        "shapes": [shape.to_dict() for shape in scene.shapes],
        "timestamp": now.isoformat(),
        "formatVersion": FORMAT_VERSION,
    }


def _shape_entry(idx, entry) -> dict:
    if not isinstance(entry, dict):
        raise InvalidFormatError(f"shape #{idx} is not an object")
    if "kind" not in entry and "type" in entry:
        # anciens exports : "type" au lieu de "kind"
        entry = dict(entry)
        entry["kind"] = entry.pop("type")
    shape_id = entry.get("id")
    if shape_id is not None and not isinstance(shape_id, ID_TYPES):
        raise InvalidFormatError(
            f"shape #{idx} has an invalid id: {shape_id!r}")
    return entry


def from_document(doc) -> Scene:
    """Valide et convertit un document en scène.

    Les formes sont copiées telles quelles : les champs inconnus sont
    conservés, les champs manquants valent ``None``. Legacy documents
    using ``type``/``version`` are read as ``kind``/``formatVersion``.
    """
    if not isinstance(doc, dict):
        raise InvalidFormatError("painting document must be a JSON object")
    entries = doc.get("shapes")
    if not isinstance(entries, list):
        raise InvalidFormatError("painting document has no 'shapes' list")
    name = doc.get("name")
    if name is not None and not isinstance(name, str):
        raise InvalidFormatError(f"painting name must be a string: {name!r}")
    shapes = [
        Shape.from_dict(_shape_entry(idx, entry))
        for idx, entry in enumerate(entries)
    ]
    version = doc.get("formatVersion", doc.get("version"))
    if version not in (None, FORMAT_VERSION):
        logger.info(f"Reading document with formatVersion {version!r}")
    return Scene(
        name=name or DEFAULT_NAME,
        shapes=shapes,
        timestamp=doc.get("timestamp"),
        format_version=version,
    )


def dumps(scene: Scene) -> str:
    return json.dumps(to_document(scene), indent=2, ensure_ascii=False)


def loads(text: str) -> Scene:
    try:
        doc = json.loads(text)
    except ValueError as e:
        raise InvalidFormatError(f"invalid JSON: {e}") from e
    return from_document(doc)


# ---------------------------------------------------------------------------
def sanitize_name(name: str) -> str:
    """Lowercase ``name`` and replace anything but [a-z0-9] with '_'."""
    return re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE).lower()


def export_filename(name: str, stamp_ms: int = None) -> str:
    if stamp_ms is None:
        stamp_ms = int(time.time() * 1000)
    return f"{sanitize_name(name)}_{stamp_ms}.json"


def write_scene_file(path, scene: Scene):
    logger.debug(f"Exporting {len(scene.shapes)} shapes to {path}")
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(scene))


def read_scene_file(path) -> Scene:
    logger.debug(f"Importing painting from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise InvalidFormatError(f"not a UTF-8 text file: {e}") from e
    return loads(text)
