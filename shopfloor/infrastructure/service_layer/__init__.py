from .activity_writer import ServiceLayerActivityWriter
from .client import ServiceLayerClient

__all__ = ["ServiceLayerActivityWriter", "ServiceLayerClient"]
