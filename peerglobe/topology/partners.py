import locale
from typing import Dict, Iterable, List


def is_self_name(name: str, self_name: str) -> bool:
    return (name or "").strip().casefold() == (self_name or "").strip().casefold()


def _collation_key(name: str):
    # strxfrm rejects embedded NULs; the raw name still breaks ties.
    return (locale.strxfrm(name.casefold().replace("\x00", "")), name)


def normalize_partners(raw_names: Iterable[str], self_name: str) -> List[str]:
    """
    Clean one facility's partner names:
      trim -> drop empty -> drop self-name (case-insensitive)
      -> de-duplicate on the exact trimmed value (first casing wins)
      -> locale-aware sort.
    The result does not depend on input order.
    """
    seen: Dict[str, None] = {}
    for raw in raw_names:
        name = str(raw).strip() if raw is not None else ""
        if not name or is_self_name(name, self_name):
            continue
        if name not in seen:
            seen[name] = None
    return sorted(seen, key=_collation_key)
