from calculator_agent.config.logging_setup import configure_logging
from calculator_agent.config.models import AVAILABLE_MODELS, ModelConfig, select_model
from calculator_agent.config.settings import Settings, load_settings

__all__ = [
    "AVAILABLE_MODELS",
    "ModelConfig",
    "Settings",
    "configure_logging",
    "load_settings",
    "select_model",
]
