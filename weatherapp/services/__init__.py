from .orchestrator import WeatherOrchestrator

__all__ = ["WeatherOrchestrator"]
