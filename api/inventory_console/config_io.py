from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import json, logging, os

logger = logging.getLogger(__name__)


def _data_root(root: Optional[Path] = None) -> Path:
    if root is not None:
        p = Path(root).expanduser()
    else:
        env = os.environ.get("INVENTORY_DATA_ROOT")
        p = Path(env).expanduser() if env else Path.cwd() / "inventory-data"
    p.mkdir(parents=True, exist_ok=True)
    return p.resolve()


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _read_json(p: Path) -> Any:
    """Missing file -> None. Unreadable file -> ValueError/OSError bubble up."""
    if not p.exists():
        return None
    return json.loads(p.read_text(encoding="utf-8"))


def _atomic_write(path: Path, data: Any) -> None:
    _ensure_dir(path.parent)
    # serialize before touching the filesystem so a bad value never truncates the slot
    payload = json.dumps(data, ensure_ascii=False, indent=2)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise


class JsonSlotStore:
    """
    Key/value store of named slots, one ``<slot>.json`` file each.

    Plays the part browser localStorage plays for a web console: a slot holds
    the full record list of one collection.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = _data_root(root)

    def slot_path(self, slot: str) -> Path:
        return self.root / f"{slot}.json"

    def load(self, slot: str) -> Optional[List[Dict[str, Any]]]:
        """Records saved under ``slot``, or None when it was never written."""
        data = _read_json(self.slot_path(slot))
        if data is None:
            return None
        if not isinstance(data, list):
            raise ValueError(f"slot {slot!r} does not hold a list")
        return data

    def save(self, slot: str, records: List[Dict[str, Any]]) -> None:
        _atomic_write(self.slot_path(slot), records)

    def quarantine(self, slot: str) -> Optional[Path]:
        """Move an unreadable slot aside as ``<slot>.json.bad`` (numbered if taken)."""
        src = self.slot_path(slot)
        if not src.exists():
            return None
        dest = src.with_name(f"{src.name}.bad")
        n = 1
        while dest.exists():
            dest = src.with_name(f"{src.name}.bad{n}")
            n += 1
        os.replace(src, dest)
        return dest

    def remove(self, slot: str) -> None:
        try:
            self.slot_path(slot).unlink()
        except FileNotFoundError:
            pass

    def slots(self) -> List[str]:
        return sorted(p.stem for p in self.root.glob("*.json"))
