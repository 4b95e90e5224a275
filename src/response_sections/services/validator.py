from __future__ import annotations

from jsonschema import ValidationError, validate


def validate_payload_schema(payload: dict, payload_schema: dict, surface_id: str) -> None:
    """Check ``payload`` against a surface's schema.

    Schema violations are reported as ``ValueError`` naming the surface and the
    offending field path, the same error type the rest of the pipeline raises
    for bad input.
    """
    try:
        validate(instance=payload, schema=payload_schema)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "data"
        raise ValueError(f"Invalid payload for surface '{surface_id}' at {location}: {exc.message}") from exc
