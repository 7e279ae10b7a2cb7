import re

import bcrypt

from railbook import config

_BCRYPT_HASH = re.compile(r"^\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}$")


class AuthError(Exception):
    pass


class CredentialFormatError(Exception):
    pass


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > config.BCRYPT_MAX_BYTES:
        raise ValueError(f"password longer than {config.BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)).decode("ascii")


def check_password(password: str, hashed: str) -> bool:
    if not isinstance(hashed, str) or not _BCRYPT_HASH.match(hashed):
        raise CredentialFormatError("stored password hash is not a bcrypt hash")
    encoded = password.encode("utf-8")
    # hash_password never accepts these, so they cannot match
    if len(encoded) > config.BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode("ascii"))
