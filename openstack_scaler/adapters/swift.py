"""
Module containing the adapter for the number of objects in an OpenStack object
storage container.
"""

import dataclasses
import logging
import typing as t
from urllib.parse import quote

import httpx

from .. import errors
from . import base


logger = logging.getLogger(__name__)


#: The default number of objects per replica
DEFAULT_OBJECT_COUNT = 2


@dataclasses.dataclass(frozen=True)
class SwiftMetadata:
    """
    Metadata for counting the objects in a container.
    """

    #: The URL of the object storage account, e.g. http://swift:8080/v1/AUTH_project
    swift_url: str
    #: The name of the container
    container_name: str
    #: The target number of objects per replica
    object_count: int = DEFAULT_OBJECT_COUNT
    #: Only count objects whose names start with this prefix
    object_prefix: t.Optional[str] = None
    #: Roll up object names containing the delimiter into pseudo-directories
    object_delimiter: t.Optional[str] = None
    #: The maximum number of object names to list
    object_limit: t.Optional[int] = None
    #: Indicates whether pseudo-directories should be excluded from the count
    only_files: bool = False
    #: The timeout for requests in seconds, if different to the default
    timeout: t.Optional[int] = None

    @classmethod
    def from_trigger_metadata(cls, metadata):
        object_limit = None
        if metadata.get("objectLimit"):
            object_limit = base.parse_int(metadata, "objectLimit")
        return cls(
            base.required_str(metadata, "swiftURL"),
            base.required_str(metadata, "containerName"),
            base.parse_int(metadata, "objectCount", DEFAULT_OBJECT_COUNT),
            base.optional_str(metadata, "objectPrefix"),
            base.optional_str(metadata, "objectDelimiter"),
            object_limit,
            base.parse_bool(metadata, "onlyFiles"),
            base.parse_timeout(metadata),
        )

    @property
    def lists_objects(self):
        """
        Indicates whether counting requires the object names to be listed.
        """
        return bool(
            self.object_prefix
            or self.object_delimiter
            or self.object_limit
            or self.only_files
        )


def decode_object_count(headers) -> int:
    """
    Returns the object count from the headers of a container response.
    """
    value = headers.get("X-Container-Object-Count")
    if value is None:
        raise errors.DecodeError("response has no X-Container-Object-Count header")
    try:
        return int(value)
    except ValueError:
        raise errors.DecodeError(f"object count is not an integer: {value!r}")


def count_listing(text, only_files=False) -> int:
    """
    Returns the number of object names in a plain text container listing.
    """
    names = [name for name in text.splitlines() if name]
    if only_files:
        # Pseudo-directories are reported with a trailing slash
        names = [name for name in names if not name.endswith("/")]
    return len(names)


class SwiftAdapter(base.Adapter):
    """
    Adapter that reads the number of objects in a container.
    """

    kind = "openstack-swift"
    metadata_cls = SwiftMetadata

    def identifier(self):
        return self.metadata.container_name

    def target_value(self):
        return self.metadata.object_count

    def _listing_params(self):
        params = {}
        if self.metadata.object_prefix:
            params.update(prefix=self.metadata.object_prefix)
        if self.metadata.object_delimiter:
            params.update(delimiter=self.metadata.object_delimiter)
        if self.metadata.object_limit:
            params.update(limit=str(self.metadata.object_limit))
        return params

    def read(self, session, timeout=httpx.USE_CLIENT_DEFAULT):
        url = "{}/{}".format(
            self.metadata.swift_url.rstrip("/"),
            quote(self.metadata.container_name, safe=""),
        )
        if self.metadata.lists_objects:
            params = self._listing_params()
            logger.debug("Listing objects in %s with %s", url, params)
            response = self._get(session, url, params=params, timeout=timeout)
            return float(count_listing(response.text, self.metadata.only_files))
        else:
            logger.debug("Reading object count for %s", url)
            response = self._get(session, url, timeout=timeout)
            return float(decode_object_count(response.headers))
