# dealership/utils/identifiers.py
import uuid
import base58


def generate_reference(prefix: str) -> str:
    """Prefix plus a base58-encoded random UUID, e.g. PAY_4vJ9..."""
    return f"{prefix}{base58.b58encode(uuid.uuid4().bytes).decode()}"
