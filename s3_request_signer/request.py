import datetime
import enum
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from s3_request_signer.errors import ValidationError

__all__ = [
    "DEFAULT_FORM_CONTENT_TYPE",
    "HttpMethod",
    "S3Request",
    "S3RequestBuilder",
    "to_utc",
]

# Content type the transport sends for PUT and POST bodies when none is given.
DEFAULT_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HttpMethod(enum.Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"


def to_utc(timestamp: datetime.datetime) -> datetime.datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=datetime.timezone.utc)
    return timestamp.astimezone(datetime.timezone.utc)


@dataclass(frozen=True)
class S3Request:
    """
    A single, fully built request to an S3 bucket. S3RequestBuilder
    validates every field; constructing one directly only checks that a
    bucket is given.
    """

    bucket: str
    object_name: str = ""
    method: HttpMethod = HttpMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    content: str = ""
    content_type: Optional[str] = None
    timestamp: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    # The header mapping is read-only but not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ValidationError("bucket name must not be empty")
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "timestamp", to_utc(self.timestamp))

    @property
    def effective_content_type(self) -> str:
        """
        The content type that will actually be sent with the request.
        """
        if self.content_type:
            return self.content_type
        if self.method in (HttpMethod.PUT, HttpMethod.POST):
            return DEFAULT_FORM_CONTENT_TYPE
        return ""

    def with_headers(self, headers: Mapping[str, str]) -> "S3Request":
        """
        Get a copy of this request with extra headers added. Existing
        headers with the same name are replaced.

        :param headers: The headers to add.
        :return: The new request.
        """
        return replace(self, headers={**self.headers, **headers})


class S3RequestBuilder:
    def __init__(self, timestamp: Optional[datetime.datetime] = None) -> None:
        """
        Create a builder for a single S3 request.

        All setters validate their arguments and return the builder, so
        calls can be chained. Call build to get the immutable request.

        :param timestamp: The time the request is made at. Every date
            derived while signing the request comes from this value.
            Defaults to the current time.
        """
        if timestamp is None:
            timestamp = datetime.datetime.now(datetime.timezone.utc)
        elif not isinstance(timestamp, datetime.datetime):
            raise ValidationError("timestamp must be a datetime")

        self.timestamp = to_utc(timestamp)
        self.method = HttpMethod.GET
        self.bucket = ""
        self.object_name = ""
        self.content = ""
        self.content_type: Optional[str] = None
        self.headers: Dict[str, str] = {}

    def set_http_method(self, method: Union[HttpMethod, str]) -> "S3RequestBuilder":
        if isinstance(method, HttpMethod):
            self.method = method
            return self
        if not isinstance(method, str):
            raise ValidationError("http method must be string")
        try:
            self.method = HttpMethod(method.upper())
        except ValueError:
            raise ValidationError(
                "unsupported http method: {}".format(method)
            ) from None
        return self

    def set_bucket(self, bucket: str) -> "S3RequestBuilder":
        if not isinstance(bucket, str):
            raise ValidationError("bucket name must be string")
        self.bucket = bucket
        return self

    def set_object_name(self, object_name: str) -> "S3RequestBuilder":
        if not isinstance(object_name, str):
            raise ValidationError("object name must be string")
        self.object_name = object_name
        return self

    def set_content(self, content: str) -> "S3RequestBuilder":
        if not isinstance(content, str):
            raise ValidationError("content must be passed as a string")
        self.content = content
        return self

    def set_content_type(self, content_type: str) -> "S3RequestBuilder":
        if not isinstance(content_type, str):
            raise ValidationError("content type must be passed as a string")
        self.content_type = content_type
        return self

    def add_header(self, name: str, value: str) -> "S3RequestBuilder":
        if not isinstance(name, str):
            raise ValidationError("header name must be string")
        if not isinstance(value, str):
            raise ValidationError("header value must be string")
        self.headers[name] = value
        return self

    def build(self) -> S3Request:
        return S3Request(
            bucket=self.bucket,
            object_name=self.object_name,
            method=self.method,
            headers=self.headers,
            content=self.content,
            content_type=self.content_type or None,
            timestamp=self.timestamp,
        )
