from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("pow2shift")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .decompose import Decomposition, InvalidInput, MinusOne, PlusOne, PureShift, decompose
from .fmt import format_expression
from .runtime import APPLY, CFG
from .scanner import TokenSpan, scan
from .substitute import Replacement, SubstitutionReport, UnparsableToken, substitute, substitute_with_report
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "Decomposition",
    "InvalidInput",
    "MinusOne",
    "PlusOne",
    "PureShift",
    "Replacement",
    "SubstitutionReport",
    "TokenSpan",
    "UnparsableToken",
    "__version__",
    "decompose",
    "format_expression",
    "has_profile",
    "load_settings",
    "scan",
    "substitute",
    "substitute_with_report",
    "workspace_dir",
]
