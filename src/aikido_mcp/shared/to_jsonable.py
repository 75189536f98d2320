from dataclasses import asdict, is_dataclass


def to_jsonable(obj):
    """Convert tool results and protocol messages to JSON-serializable data.

    Handles:
    - Basic types (str, int, float, bool, None)
    - Collections (list, tuple, dict)
    - Pydantic models (only the fields that were actually set, so records
      parsed from the API keep the shape the API sent)
    - Dataclasses
    - Bytes/Bytearray
    - Objects with __dict__

    Args:
        obj: Any Python object

    Returns:
        A JSON-serializable version of the object
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    elif isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    elif isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    elif isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    elif hasattr(obj, 'model_dump'):
        return to_jsonable(obj.model_dump(exclude_unset=True))
    elif is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))
    elif hasattr(obj, '__dict__'):
        return to_jsonable(obj.__dict__)
    else:
        return str(obj)
