from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

__all__ = ["ExchangeLog", "FetchParams", "Transport", "TransportResponse"]

MAX_LOGGED_VALUE_LENGTH = 1000


@dataclass(frozen=True)
class FetchParams:
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""
    content_type: Optional[str] = None


@dataclass(frozen=True)
class TransportResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def get_header(self, name: str) -> Optional[str]:
        """
        Look up a response header, ignoring case.

        :param name: The header name.
        :return: The header value or None if the header is absent.
        """
        lower_name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lower_name:
                return value
        return None


class Transport(Protocol):
    """
    The HTTP transport used to send signed requests.

    Implementations must return non-2xx responses instead of raising, so
    the caller can classify them.
    """

    def fetch(self, url: str, params: FetchParams) -> TransportResponse:
        ...

    def get_raw_request(self, url: str, params: FetchParams) -> Mapping[str, Any]:
        ...


def _truncate(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_LOGGED_VALUE_LENGTH:
        return value[:MAX_LOGGED_VALUE_LENGTH] + " ... [TRUNCATED]"
    return value


@dataclass(frozen=True)
class ExchangeLog:
    """
    A single request/response pair, kept for diagnostics.

    The request is the transport's raw representation of what was sent,
    with the Authorization header redacted.
    """

    request: Mapping[str, Any]
    response: TransportResponse

    def __str__(self) -> str:
        lines = ["", "-- REQUEST --"]
        for key, value in self.request.items():
            if isinstance(value, Mapping):
                lines.append("\t{}:".format(key))
                for name, item in value.items():
                    lines.append("\t\t{}: {}".format(name, _truncate(item)))
            else:
                lines.append("\t{}: {}".format(key, _truncate(value)))

        lines.append("-- RESPONSE --")
        lines.append("HTTP Status Code: {}".format(self.response.status))
        lines.append("Headers:")
        for name, item in self.response.headers.items():
            lines.append("\t{}: {}".format(name, item))
        lines.append("Body:")
        lines.append(_truncate(self.response.text))
        return "\n".join(lines)
