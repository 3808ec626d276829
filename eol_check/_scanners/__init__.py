"""Project and host scanners that discover versioned components."""

from .ai_models import AIScanResult, scan_ai_models, scan_ai_sdks, scan_for_model_usage
from .dependencies import clean_version, scan_dependencies
from .docker import parse_image_reference, scan_dockerfiles
from .environment import scan_environment
from .infrastructure import parse_aws_runtime, scan_infrastructure
from .models import (
    AISDKDetection,
    Dependency,
    DependencyType,
    DetectedAIModel,
    EnvironmentInfo,
    ServiceVersion,
)

__all__ = [
    "AISDKDetection",
    "AIScanResult",
    "Dependency",
    "DependencyType",
    "DetectedAIModel",
    "EnvironmentInfo",
    "ServiceVersion",
    "clean_version",
    "parse_aws_runtime",
    "parse_image_reference",
    "scan_ai_models",
    "scan_ai_sdks",
    "scan_dependencies",
    "scan_dockerfiles",
    "scan_environment",
    "scan_for_model_usage",
    "scan_infrastructure",
]
