import datetime
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from s3_request_signer.config import S3Settings
from s3_request_signer.dispatch import ExecuteOptions, ExecutionResult, execute
from s3_request_signer.errors import AwsError
from s3_request_signer.request import HttpMethod, S3Request, S3RequestBuilder
from s3_request_signer.requests import RequestsTransport
from s3_request_signer.signer import S3RequestSigner
from s3_request_signer.transport import Transport

__all__ = ["Blob", "S3Service"]

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Blob:
    data: str
    content_type: str = ""


class S3Service:
    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        transport: Optional[Transport] = None,
        default_options: Optional[ExecuteOptions] = None,
    ) -> None:
        """
        Create a client for the buckets of one AWS region.

        :param access_key_id: The AWS access key id to use for authentication.
        :param secret_access_key: The AWS secret access key to use for authentication.
        :param region: The AWS region the buckets live in.
        :param transport: The HTTP transport. Defaults to a RequestsTransport.
        :param default_options: Options used when a call doesn't pass any.
        """
        self.signer = S3RequestSigner(region, access_key_id, secret_access_key)
        self.transport: Transport = (
            transport if transport is not None else RequestsTransport()
        )
        self.default_options = default_options or ExecuteOptions()

    @classmethod
    def from_settings(
        cls, settings: S3Settings, transport: Optional[Transport] = None
    ) -> "S3Service":
        if transport is None:
            transport = RequestsTransport(timeout=settings.request_timeout)
        return cls(
            settings.aws_access_key_id,
            settings.aws_secret_access_key,
            settings.aws_region,
            transport=transport,
            default_options=settings.execute_options,
        )

    @property
    def region(self) -> str:
        return self.signer.region

    def new_request(
        self, timestamp: Optional[datetime.datetime] = None
    ) -> S3RequestBuilder:
        return S3RequestBuilder(timestamp)

    def execute(
        self, request: S3Request, options: Optional[ExecuteOptions] = None
    ) -> ExecutionResult:
        return execute(
            request, self.signer, self.transport, options or self.default_options
        )

    def create_bucket(
        self, bucket: str, options: Optional[ExecuteOptions] = None
    ) -> ExecutionResult:
        request = (
            self.new_request()
            .set_http_method(HttpMethod.PUT)
            .set_bucket(bucket)
            .build()
        )
        result = self.execute(request, options)
        logger.info("Created bucket %s", bucket)
        return result

    def delete_bucket(
        self, bucket: str, options: Optional[ExecuteOptions] = None
    ) -> ExecutionResult:
        request = (
            self.new_request()
            .set_http_method(HttpMethod.DELETE)
            .set_bucket(bucket)
            .build()
        )
        result = self.execute(request, options)
        logger.info("Deleted bucket %s", bucket)
        return result

    def put_object(
        self,
        bucket: str,
        object_name: str,
        obj: Union[Blob, Any],
        options: Optional[ExecuteOptions] = None,
    ) -> ExecutionResult:
        """
        Store an object in a bucket.

        :param bucket: The bucket to store the object in.
        :param object_name: The key of the object.
        :param obj: A Blob, or any JSON serializable value which is stored
            as `application/json`.
        :param options: Diagnostic options.
        :return: The execution result.
        """
        if not isinstance(obj, Blob):
            obj = Blob(json.dumps(obj), JSON_CONTENT_TYPE)

        builder = (
            self.new_request()
            .set_http_method(HttpMethod.PUT)
            .set_bucket(bucket)
            .set_object_name(object_name)
            .set_content(obj.data)
        )
        if obj.content_type:
            builder.set_content_type(obj.content_type)

        result = self.execute(builder.build(), options)
        logger.info("Stored s3://%s/%s", bucket, object_name)
        return result

    def get_object(
        self,
        bucket: str,
        object_name: str,
        options: Optional[ExecuteOptions] = None,
    ) -> Union[Blob, Any, None]:
        """
        Fetch an object from a bucket.

        :param bucket: The bucket holding the object.
        :param object_name: The key of the object.
        :param options: Diagnostic options.
        :return: The decoded value for `application/json` objects, a Blob
            for anything else, or None if the object does not exist.
        """
        request = (
            self.new_request()
            .set_http_method(HttpMethod.GET)
            .set_bucket(bucket)
            .set_object_name(object_name)
            .build()
        )
        try:
            result = self.execute(request, options)
        except AwsError as e:
            if e.code == "NoSuchKey":
                logger.debug("s3://%s/%s does not exist", bucket, object_name)
                return None
            raise

        response = result.response
        content_type = response.get_header("Content-Type") or ""
        if content_type.split(";", 1)[0].strip() == JSON_CONTENT_TYPE:
            return json.loads(response.text)
        return Blob(response.text, content_type)

    def delete_object(
        self,
        bucket: str,
        object_name: str,
        options: Optional[ExecuteOptions] = None,
    ) -> ExecutionResult:
        request = (
            self.new_request()
            .set_http_method(HttpMethod.DELETE)
            .set_bucket(bucket)
            .set_object_name(object_name)
            .build()
        )
        result = self.execute(request, options)
        logger.info("Deleted s3://%s/%s", bucket, object_name)
        return result
