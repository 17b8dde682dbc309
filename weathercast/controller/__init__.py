from .orchestrator import FetchState, WeatherOrchestrator
from .service_factory import ServiceBundle, ServiceFactory

__all__ = ["FetchState", "ServiceBundle", "ServiceFactory", "WeatherOrchestrator"]
