from importlib.metadata import version as _pkg_version, PackageNotFoundError as _PkgNotFound

try:
    __version__ = _pkg_version("simply-api")
except _PkgNotFound:
    __version__ = "dev"

from .options import ApiOptions, ResponseType
from .serializer import DataclassSerializer, Serializer
from .client import HttpClient, HttpxClient
from .facade import ApiCall, SimplyApi

__all__ = [
    "__version__",
    "ApiCall",
    "ApiOptions",
    "DataclassSerializer",
    "HttpClient",
    "HttpxClient",
    "ResponseType",
    "Serializer",
    "SimplyApi",
]
