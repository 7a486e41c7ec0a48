from typing import Any, Dict, Mapping, Optional

import requests

from s3_request_signer.errors import TransportError
from s3_request_signer.transport import FetchParams, TransportResponse

__all__ = ["RequestsTransport"]


class RequestsTransport:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize a transport that sends requests using a requests
        session. Responses with any status code are returned as is.

        :param session: The session to use. A new session is created if
            not specified.
        :param timeout: The timeout passed to requests, in seconds. No
            timeout is applied if not specified.
        """
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _get_request(self, url: str, params: FetchParams) -> requests.Request:
        headers: Dict[str, str] = dict(params.headers)
        if params.content_type and not any(
            key.lower() == "content-type" for key in headers
        ):
            headers["Content-Type"] = params.content_type

        return requests.Request(
            method=params.method,
            url=url,
            headers=headers,
            data=params.body.encode("utf-8") if params.body else None,
        )

    def fetch(self, url: str, params: FetchParams) -> TransportResponse:
        prepared = self.session.prepare_request(self._get_request(url, params))
        try:
            response = self.session.send(prepared, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(
                "{} {} failed: {}".format(params.method, url, e)
            ) from e

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def get_raw_request(self, url: str, params: FetchParams) -> Mapping[str, Any]:
        prepared = self._get_request(url, params).prepare()
        body = prepared.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")

        return {
            "method": prepared.method,
            "url": prepared.url,
            "headers": dict(prepared.headers),
            "body": body or "",
        }
