from .. import errors
from .alarm import AlarmAdapter
from .base import Adapter  # noqa: F401
from .measures import MeasuresAdapter
from .swift import SwiftAdapter


#: The available adapters, indexed by kind
ADAPTERS = {
    adapter_cls.kind: adapter_cls
    for adapter_cls in (MeasuresAdapter, AlarmAdapter, SwiftAdapter)
}


def get_adapter_class(kind):
    """
    Returns the adapter class for the given kind.
    """
    try:
        return ADAPTERS[kind]
    except KeyError:
        raise errors.ConfigError(f"unknown adapter kind: {kind}")
