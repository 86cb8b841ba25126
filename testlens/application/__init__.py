from .extract_usecase import ExtractUseCase, ExtractUseCaseError
from .run_targets import (
    LineIndex,
    RunTarget,
    build_runner_url,
    location_of,
    target_for_module,
    target_for_test,
)

__all__ = [
    "ExtractUseCase",
    "ExtractUseCaseError",
    "LineIndex",
    "RunTarget",
    "build_runner_url",
    "location_of",
    "target_for_module",
    "target_for_test",
]
