from typing import Any, Dict, Iterable, List, Mapping


def grouping_key(record: Mapping[str, Any]) -> str:
    # Exact, case-sensitive: "Milk-Acme" and "Milk-ACME" are different groups.
    return f"{record['name']}-{record['brand']}"


def aggregate_inventory(records: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Collapse records sharing (name, brand) into counted view entries.

    Each entry carries the fields of the last record seen for its key plus
    ``count``. Entries keep the order in which their key first appeared.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for record in records:
        key = grouping_key(record)
        seen = groups[key]["count"] if key in groups else 0
        # Re-assigning an existing key keeps its original position
        groups[key] = {**record, "count": seen + 1}
    return list(groups.values())
