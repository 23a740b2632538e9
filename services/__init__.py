"""Services module - Business logic layer.

This module provides the pipeline stages:
- BootstrapService: Ensures storage containers exist
- TestPipelineService: Upload, resolve, test, archive, clean up, update benchmark

Steps used by the pipeline:
- trigger_resolver: Run identity and mode from the CI trigger
- dataset_uploader: Testing data packaging and upload
- model_resolver: Benchmark/baseline model selection
- test_runner: Test creation
- result_archiver: Summary and results archiving
- benchmark_pointer: Benchmark pointer blob
"""

from services.benchmark_pointer import BenchmarkPointer, should_update_pointer
from services.bootstrap_service import BootstrapService
from services.dataset_uploader import DatasetUploader
from services.model_resolver import ModelResolution, ModelResolver
from services.result_archiver import ArchivedResults, ResultArchiver
from services.test_pipeline_service import PipelineResult, TestPipelineService
from services.test_runner import TestRunner
from services.trigger_resolver import TriggerContext, resolve_trigger

__all__ = [
    "BenchmarkPointer",
    "should_update_pointer",
    "BootstrapService",
    "DatasetUploader",
    "ModelResolution",
    "ModelResolver",
    "ArchivedResults",
    "ResultArchiver",
    "PipelineResult",
    "TestPipelineService",
    "TestRunner",
    "TriggerContext",
    "resolve_trigger",
]
