import logging
from dataclasses import dataclass
from typing import Dict, Optional

from s3_request_signer.errors import TransportError, decode_error_response
from s3_request_signer.request import S3Request
from s3_request_signer.signer import S3RequestSigner, format_rfc1123, payload_hash
from s3_request_signer.transport import (
    ExchangeLog,
    FetchParams,
    Transport,
    TransportResponse,
)

__all__ = ["ExecuteOptions", "ExecutionResult", "execute", "prepare_headers"]

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"


@dataclass(frozen=True)
class ExecuteOptions:
    """
    Diagnostic options for a single request.

    :ivar log_requests: Log every request/response exchange.
    :ivar echo_request_to_url: Also send every request to this URL. The
        response of the echo is ignored.
    """

    log_requests: bool = False
    echo_request_to_url: Optional[str] = None


@dataclass(frozen=True)
class ExecutionResult:
    response: TransportResponse
    exchange_log: ExchangeLog


def prepare_headers(request: S3Request, signer: S3RequestSigner) -> Dict[str, str]:
    """
    Get the full set of headers to send with a request, including the
    content hash, the content type and the authentication headers.

    The Date header is added after signing and is therefore not part of
    the signed headers.

    :param request: The request to send.
    :param signer: The signer holding the credentials.
    :return: The headers to send.
    """
    extra_headers = {"x-amz-content-sha256": payload_hash(request.content)}
    content_type = request.effective_content_type
    if content_type:
        extra_headers["Content-Type"] = content_type

    signed_request = request.with_headers(extra_headers)

    return {
        **signed_request.headers,
        "Authorization": signer.get_authorization_header(signed_request),
        "Date": format_rfc1123(request.timestamp),
    }


def execute(
    request: S3Request,
    signer: S3RequestSigner,
    transport: Transport,
    options: Optional[ExecuteOptions] = None,
) -> ExecutionResult:
    """
    Sign and send a request.

    :param request: The request to send.
    :param signer: The signer holding the credentials.
    :param transport: The transport to send the request with.
    :param options: Diagnostic options.
    :raises AwsError: If the service responds with a status above 299.
    :return: The response together with the exchange log.
    """
    if options is None:
        options = ExecuteOptions()

    url = signer.get_url(request)
    content_type = request.effective_content_type
    params = FetchParams(
        method=request.method.value,
        headers=prepare_headers(request, signer),
        body=request.content,
        content_type=content_type or None,
    )

    logger.debug("%s %s", params.method, url)
    response = transport.fetch(url, params)

    redacted_params = FetchParams(
        method=params.method,
        headers={**params.headers, "Authorization": REDACTED},
        body=params.body,
        content_type=params.content_type,
    )
    exchange_log = ExchangeLog(
        request=transport.get_raw_request(url, redacted_params), response=response
    )
    if options.log_requests:
        logger.info("%s", exchange_log)

    if options.echo_request_to_url:
        try:
            transport.fetch(options.echo_request_to_url, params)
        except TransportError as e:
            logger.warning("Echo to %s failed: %s", options.echo_request_to_url, e)

    # AWS uses several 2xx codes for success.
    if response.status > 299:
        logger.warning(
            "%s %s failed with HTTP status %d", params.method, url, response.status
        )
        raise decode_error_response(response, exchange_log)

    return ExecutionResult(response=response, exchange_log=exchange_log)
