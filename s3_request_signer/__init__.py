from s3_request_signer.crypto import (
    Charset,
    DigestAlgorithm,
    MacAlgorithm,
    compute_digest,
    compute_hmac_signature,
)
from s3_request_signer.dispatch import ExecuteOptions, ExecutionResult, execute
from s3_request_signer.errors import (
    AwsError,
    MalformedErrorBody,
    S3RequestError,
    TransportError,
    ValidationError,
    decode_error_response,
)
from s3_request_signer.request import HttpMethod, S3Request, S3RequestBuilder
from s3_request_signer.service import Blob, S3Service
from s3_request_signer.signer import S3RequestSigner, derive_signing_key
from s3_request_signer.transport import (
    ExchangeLog,
    FetchParams,
    Transport,
    TransportResponse,
)

__all__ = [
    "AwsError",
    "Blob",
    "Charset",
    "DigestAlgorithm",
    "ExchangeLog",
    "ExecuteOptions",
    "ExecutionResult",
    "FetchParams",
    "HttpMethod",
    "MacAlgorithm",
    "MalformedErrorBody",
    "S3Request",
    "S3RequestBuilder",
    "S3RequestError",
    "S3RequestSigner",
    "S3Service",
    "Transport",
    "TransportError",
    "TransportResponse",
    "ValidationError",
    "compute_digest",
    "compute_hmac_signature",
    "decode_error_response",
    "derive_signing_key",
    "execute",
]
