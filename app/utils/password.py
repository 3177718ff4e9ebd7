"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification using bcrypt. Only the hash is stored on
the user row.

bcrypt는 입력의 처음 72바이트만 사용하므로 해싱과 검증 모두 같은 길이로 자릅니다.
bcrypt only consumes the first 72 bytes of input (newer releases reject
longer input outright), so both sides truncate identically.
"""

import bcrypt

_BCRYPT_MAX_BYTES: int = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password with a fresh random salt.

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 저장된 해시를 비교합니다. 해시 형식이 잘못되면 False.

    Check a plain text password against a stored hash. A malformed hash
    never matches.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
