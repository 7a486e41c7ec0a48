from typing import ClassVar, Dict, Optional
from xml.etree import ElementTree as ET

from s3_request_signer.transport import ExchangeLog, TransportResponse

__all__ = [
    "AwsError",
    "MalformedErrorBody",
    "S3RequestError",
    "TransportError",
    "ValidationError",
    "decode_error_response",
]


class S3RequestError(Exception):
    kind: ClassVar[str] = "S3RequestError"


class ValidationError(S3RequestError, ValueError):
    """
    Raised when a request is built from arguments of the wrong type.
    """

    kind = "ValidationError"


class TransportError(S3RequestError):
    """
    Raised by a transport when a request could not be sent or no
    response was received.
    """

    kind = "TransportError"


class AwsError(S3RequestError):
    """
    Raised when the storage service answers with a status above 299.

    :ivar code: The AWS error code (f.e. `NoSuchKey`), if known.
    :ivar message: The human readable error message.
    :ivar fields: All decoded fields of the XML error body, with their
        tag names converted to lower camel case.
    :ivar status: The HTTP status code of the response.
    :ivar http_request_log: The exchange that produced this error.
    """

    kind = "AwsError"

    def __init__(
        self,
        code: Optional[str],
        message: str,
        status: int,
        http_request_log: Optional[ExchangeLog] = None,
        fields: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.status = status
        self.http_request_log = http_request_log
        self.fields = dict(fields or {})

    def __str__(self) -> str:
        return "AWS Error - {}: {}".format(self.code, self.message)


class MalformedErrorBody(AwsError):
    kind = "MalformedErrorBody"

    def __init__(
        self, status: int, http_request_log: Optional[ExchangeLog] = None
    ) -> None:
        super().__init__(
            None,
            "AWS returned HTTP code {}, but error content could not be "
            "parsed.".format(status),
            status,
            http_request_log,
        )

    def __str__(self) -> str:
        return self.message


def _field_name(tag: str) -> str:
    # Drop any "{namespace}" prefix added by ElementTree.
    name = tag.rsplit("}", 1)[-1]
    return name[:1].lower() + name[1:]


def decode_error_response(
    response: TransportResponse, exchange_log: Optional[ExchangeLog] = None
) -> AwsError:
    """
    Decode an AWS XML error body into an exception.

    Every child element of the document root becomes a field, keyed by
    its tag name with the first character lower-cased.

    :param response: The failed response.
    :param exchange_log: The exchange to attach to the error.
    :return: An AwsError, or a MalformedErrorBody if the body could not
        be parsed.
    """
    try:
        root = ET.fromstring(response.text)
    except ET.ParseError:
        return MalformedErrorBody(response.status, exchange_log)

    fields = {_field_name(child.tag): child.text or "" for child in root}
    return AwsError(
        fields.get("code"),
        fields.get("message", ""),
        response.status,
        exchange_log,
        fields,
    )
