"""File checking primitives: detection, classification, aggregation and progress.

The orchestrating ``FileChecker`` lives in ``checkfile.checking.pipeline``.
"""

from .errors import CandidateSourceError, CheckFileError, DetectionError, ProgressSetupError
from .models import SUPPORTED_EXTENSIONS, ErrorKind, RunStatistics, Verdict, VerdictKind
from .classifier import classify, file_extension, mime_subtype, normalize_extension
from .detectors import ContentTypeOracle, FileCommandOracle, MagicOracle, build_oracle
from .progress import PROGRESS, ProgressProbe, ProgressState, ProgressStatus

__all__ = [
    "CandidateSourceError",
    "CheckFileError",
    "ContentTypeOracle",
    "DetectionError",
    "ErrorKind",
    "FileCommandOracle",
    "MagicOracle",
    "PROGRESS",
    "ProgressProbe",
    "ProgressSetupError",
    "ProgressState",
    "ProgressStatus",
    "RunStatistics",
    "SUPPORTED_EXTENSIONS",
    "Verdict",
    "VerdictKind",
    "build_oracle",
    "classify",
    "file_extension",
    "mime_subtype",
    "normalize_extension",
]
