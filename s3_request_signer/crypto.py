import enum
import hashlib
import hmac
from typing import Union

__all__ = [
    "Charset",
    "DigestAlgorithm",
    "MacAlgorithm",
    "compute_digest",
    "compute_hmac_signature",
    "to_hex",
]


class Charset(enum.Enum):
    UTF_8 = "utf-8"


class DigestAlgorithm(enum.Enum):
    MD5 = "md5"
    SHA_256 = "sha256"


class MacAlgorithm(enum.Enum):
    HMAC_SHA_1 = "sha1"
    HMAC_SHA_256 = "sha256"


def _encode(value: Union[str, bytes], charset: Charset) -> bytes:
    if not isinstance(charset, Charset):
        raise ValueError("Unsupported charset: {!r}".format(charset))
    if isinstance(value, bytes):
        return value
    return value.encode(charset.value)


def compute_digest(
    algorithm: DigestAlgorithm,
    data: Union[str, bytes],
    charset: Charset = Charset.UTF_8,
) -> bytes:
    """
    Compute a message digest.

    :param algorithm: The digest algorithm to use.
    :param data: The data to hash. Strings are encoded using `charset`.
    :param charset: The charset used to encode string data.
    :return: The raw digest.
    """
    if not isinstance(algorithm, DigestAlgorithm):
        raise ValueError("Unsupported digest algorithm: {!r}".format(algorithm))
    return hashlib.new(algorithm.value, _encode(data, charset)).digest()


def compute_hmac_signature(
    algorithm: MacAlgorithm,
    data: Union[str, bytes],
    key: Union[str, bytes],
    charset: Charset = Charset.UTF_8,
) -> bytes:
    """
    Compute an HMAC signature.

    :param algorithm: The HMAC algorithm to use.
    :param data: The message to sign. Strings are encoded using `charset`.
    :param key: The signing key. Strings are encoded using `charset`.
    :param charset: The charset used to encode string data and keys.
    :return: The raw signature.
    """
    if not isinstance(algorithm, MacAlgorithm):
        raise ValueError("Unsupported HMAC algorithm: {!r}".format(algorithm))
    return hmac.new(
        _encode(key, charset), _encode(data, charset), algorithm.value
    ).digest()


def to_hex(value: bytes) -> str:
    return value.hex()
