import datetime
from email.utils import format_datetime
from typing import Dict, List, Tuple

from s3_request_signer.crypto import (
    Charset,
    DigestAlgorithm,
    MacAlgorithm,
    compute_digest,
    compute_hmac_signature,
    to_hex,
)
from s3_request_signer.request import S3Request, to_utc

__all__ = [
    "S3RequestSigner",
    "derive_signing_key",
    "format_date_stamp",
    "format_rfc1123",
    "payload_hash",
]

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
TERMINATOR = "aws4_request"

CredentialScope = Tuple[str, str, str, str]


def format_rfc1123(timestamp: datetime.datetime) -> str:
    """
    Format a timestamp like `Fri, 24 May 2013 00:00:00 GMT`. Naive
    timestamps are taken to be UTC.
    """
    return format_datetime(to_utc(timestamp), usegmt=True)


def format_date_stamp(timestamp: datetime.datetime) -> str:
    utc = to_utc(timestamp)
    return "{:04d}{:02d}{:02d}".format(utc.year, utc.month, utc.day)


def payload_hash(content: str) -> str:
    return to_hex(compute_digest(DigestAlgorithm.SHA_256, content, Charset.UTF_8))


def _hmac_sha256(key: bytes, data: str) -> bytes:
    return compute_hmac_signature(MacAlgorithm.HMAC_SHA_256, data, key, Charset.UTF_8)


def derive_signing_key(
    secret_access_key: str, date_stamp: str, region: str, service: str = SERVICE
) -> bytes:
    """
    Derive the SigV4 signing key, scoped to a single day, region and
    service.

    :param secret_access_key: The AWS secret access key.
    :param date_stamp: The date in yyyymmdd format.
    :param region: The AWS region.
    :param service: The AWS service.
    :return: The raw signing key.
    """
    signing_key = ("AWS4" + secret_access_key).encode("utf-8")
    for element in (date_stamp, region, service, TERMINATOR):
        signing_key = _hmac_sha256(signing_key, element)
    return signing_key


class S3RequestSigner:
    algorithm = ALGORITHM

    def __init__(self, region: str, access_key_id: str, secret_access_key: str) -> None:
        """
        Create a new instance of the S3RequestSigner.

        Use get_authorization_header to get the Authorization header value
        for a request. The request must already contain every header that
        is to be signed.

        :param region: The AWS region the buckets live in.
        :param access_key_id: The AWS access key id to use for authentication.
        :param secret_access_key: The AWS secret access key to use for authentication.
        """

        self.region = region
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key

    def __repr__(self) -> str:
        return "{}(region={!r})".format(type(self).__name__, self.region)

    def get_host_name(self, request: S3Request) -> str:
        return "{}.s3.{}.amazonaws.com".format(request.bucket.lower(), self.region)

    def get_url(self, request: S3Request) -> str:
        # Object names are not percent-encoded, to match the canonical path.
        return "http://{}/{}".format(self.get_host_name(request), request.object_name)

    def _get_credential_scope(self, request: S3Request) -> CredentialScope:
        """
        Internal method. Generates a credential scope containing the
        request's datestamp, the region, the service and a marker.

        :param request: The request to generate the scope for.
        :return: A tuple containing the aforementioned credential scope.
        """
        return format_date_stamp(request.timestamp), self.region, SERVICE, TERMINATOR

    def _get_canonical_headers(self, request: S3Request) -> List[Tuple[str, str]]:
        """
        Get the canonical header representation of a request. This
        lowercases all header names, inserts the host header and sorts the
        headers by name.

        :param request: The request.
        :return: The canonical header representation as a list of key,
            value tuples.
        """
        headers: Dict[str, str] = {
            key.lower(): value for key, value in request.headers.items()
        }
        headers["host"] = self.get_host_name(request)
        return sorted(headers.items())

    def get_signed_headers(self, request: S3Request) -> List[str]:
        return [key for key, _ in self._get_canonical_headers(request)]

    def get_canonical_request(self, request: S3Request) -> str:
        canonical_headers = self._get_canonical_headers(request)

        return "\n".join(
            (
                request.method.value,
                "/" + request.object_name,
                "",  # No query string.
                "\n".join(
                    "{}:{}".format(key, value) for key, value in canonical_headers
                ),
                "",  # Extra newline after canonical headers.
                ";".join(key for key, _ in canonical_headers),
                payload_hash(request.content),
            )
        )

    def get_string_to_sign(self, request: S3Request) -> str:
        canonical_request = self.get_canonical_request(request)

        return "\n".join(
            (
                self.algorithm,
                format_rfc1123(request.timestamp),
                "/".join(self._get_credential_scope(request)),
                to_hex(
                    compute_digest(
                        DigestAlgorithm.SHA_256, canonical_request, Charset.UTF_8
                    )
                ),
            )
        )

    def sign(self, request: S3Request) -> str:
        """
        Sign a request using the credentials of this signer.

        :param request: The request to sign.
        :return: The hex-encoded signature.
        """
        date_stamp, region, service, _ = self._get_credential_scope(request)
        signing_key = derive_signing_key(
            self.secret_access_key, date_stamp, region, service
        )
        return to_hex(_hmac_sha256(signing_key, self.get_string_to_sign(request)))

    def get_authorization_header(self, request: S3Request) -> str:
        credential = "/".join(
            (self.access_key_id,) + self._get_credential_scope(request)
        )

        return (
            "{algorithm} "
            "Credential={credential},"
            "SignedHeaders={signed_headers},"
            "Signature={signature}"
        ).format(
            algorithm=self.algorithm,
            credential=credential,
            signed_headers=";".join(self.get_signed_headers(request)),
            signature=self.sign(request),
        )
