"""
Utility functions for services
"""
import hashlib
import hmac
import random
import secrets

PATIENT_ID_PREFIX = "PS"
STAFF_ID_PREFIX = "STF"
PATIENT_ID_LENGTH = len(PATIENT_ID_PREFIX) + 5

_PBKDF2_ITERATIONS = 260000


def generate_patient_id() -> str:
    """'PS' followed by 5 random digits (10000-99999)"""
    return f"{PATIENT_ID_PREFIX}{random.randint(10000, 99999)}"


def generate_staff_id() -> str:
    """'STF' followed by 3 random digits (100-999)"""
    return f"{STAFF_ID_PREFIX}{random.randint(100, 999)}"


def is_patient_id_format(value: str) -> bool:
    """
    Lookup codes start with 'PS' followed by digits
    """
    return value.startswith(PATIENT_ID_PREFIX) and len(value) >= PATIENT_ID_LENGTH


def hash_password(password: str) -> str:
    """
    Hash a password with PBKDF2-SHA256 and a random salt

    Returns:
        "pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>"
    """
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${_PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Malformed stored hashes never match"""
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256" or rounds < 1:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(digest.hex(), digest_hex)
