from typing import Any, Dict, List

REQUIRED_FIELDS = ["sequence", "label"]


def _is_sequence(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, int):
        return v >= 0
    if isinstance(v, str):
        v = v.strip()
        # int() rejects non-ASCII digits such as "²"
        return v.isascii() and v.isdigit()
    return False


def coerce_sequence(v: Any) -> int:
    """Turn a validated sequence value into an int."""
    if isinstance(v, str):
        return int(v.strip())
    return int(v)


def validate_identity(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Accepts integer-looking strings for the sequence so that values read
    from environment variables or metadata files validate as-is.
    """
    errors: List[str] = []

    for f in REQUIRED_FIELDS:
        if f not in data or data[f] is None:
            errors.append(f"Missing required field: {f}")

    if "sequence" in data and data["sequence"] is not None:
        if not _is_sequence(data["sequence"]):
            errors.append("Field 'sequence' must be a non-negative integer")

    if "label" in data and data["label"] is not None:
        if not isinstance(data["label"], str):
            errors.append("Field 'label' must be a string")

    return errors
