"""
Credential generation and digests.

Login codes are short (10**6 possibilities) and are looked up by identity,
so they get a salted bcrypt hash. Session tokens carry 256 random bits and
are looked up by digest, so a plain SHA-256 is used.
"""

import hashlib
import secrets

import bcrypt

CODE_LENGTH = 6
CODE_HASH_ROUNDS = 10
SESSION_TOKEN_BYTES = 32
MAX_TOKEN_LENGTH = 256


def generate_code() -> str:
    """Uniformly random numeric code, leading zeros kept"""
    return f"{secrets.randbelow(10 ** CODE_LENGTH):0{CODE_LENGTH}d}"


def hash_code(code: str) -> str:
    return bcrypt.hashpw(code.encode(), bcrypt.gensalt(CODE_HASH_ROUNDS)).decode()


def check_code(code: str, code_hash: str) -> bool:
    try:
        return bcrypt.checkpw(code.encode(), code_hash.encode())
    except ValueError:
        # Malformed stored hash never matches
        return False


def generate_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
