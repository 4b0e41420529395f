"""JSON file helpers shared by every durable store."""
import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: Path, default: Any = None) -> Any:
    """Load a JSON file; a missing file yields ``default``.

    A file that exists but does not parse raises ``ValueError``: state and
    outputs are never silently replaced by an empty default.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    return json.loads(raw)


def write_json_atomic(path: Path, data: Any, *, indent: int | None = 2) -> None:
    """Write to a temp file in the target directory, then ``os.replace``.

    Readers see either the previous file or the complete new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    ) as tmp:
        tmp_path = tmp.name
        try:
            json.dump(data, tmp, indent=indent, ensure_ascii=False)
            tmp.write("\n" if indent is not None else "")
        except BaseException:
            tmp.close()
            os.unlink(tmp_path)
            raise
    os.replace(tmp_path, path)
