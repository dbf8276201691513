import re
import secrets
import string

# Same shape as Firestore auto-generated document ids
ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 20

_ID_PATTERN = re.compile(rf"[A-Za-z0-9]{{{ID_LENGTH}}}")


def new_document_id() -> str:
    """Generate a random id for sub-documents stored inside a post (comments)"""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def is_valid_document_id(value: str) -> bool:
    """
    Check that a path parameter looks like a document id
    :return: True when the value is exactly 20 alphanumeric characters
    """
    if not value:
        return False
    return bool(_ID_PATTERN.fullmatch(value))
