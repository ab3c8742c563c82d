"""Record identifier generation."""

import uuid
from typing import Container


def generate_id(prefix: str, existing: Container[str] = ()) -> str:
    """
    Generate a collision-free identifier scoped by an entity prefix.

    Args:
        prefix: Entity prefix ('u' users, 'p' patients, 'i' incidents)
        existing: Ids already in use; a candidate found here is regenerated

    Returns:
        Identifier such as 'p3f9c0a1b2d4e'
    """
    while True:
        candidate = f"{prefix}{uuid.uuid4().hex[:12]}"
        if candidate not in existing:
            return candidate
