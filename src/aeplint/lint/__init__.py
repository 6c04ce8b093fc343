# SPDX-License-Identifier: MIT
"""Rule engine — registry, layered configuration, suppression, execution and merge."""

from aeplint.lint.base import (
    EnumRule,
    EnumValueRule,
    FieldRule,
    FileRule,
    MessageRule,
    MethodRule,
    Problem,
    RawProblem,
    Response,
    Rule,
    ServiceRule,
)
from aeplint.lint.config import (
    ConfigLayer,
    ConfigSequence,
    build_config_sequence,
    is_enabled,
    load_config_file,
)
from aeplint.lint.engine import Engine, lint
from aeplint.lint.errors import (
    AeplintError,
    ConfigParseError,
    DescriptorResolutionError,
    DuplicateNameError,
    InvalidNameError,
    RuleExecutionDefect,
)
from aeplint.lint.merge import CombinedResult, any_problems, has_problems, merge
from aeplint.lint.names import RuleName, RuleNamePrefix
from aeplint.lint.registry import RuleRegistry
from aeplint.lint.suppression import SuppressionIndex

__all__ = [
    "AeplintError",
    "CombinedResult",
    "ConfigLayer",
    "ConfigParseError",
    "ConfigSequence",
    "DescriptorResolutionError",
    "DuplicateNameError",
    "Engine",
    "EnumRule",
    "EnumValueRule",
    "FieldRule",
    "FileRule",
    "InvalidNameError",
    "MessageRule",
    "MethodRule",
    "Problem",
    "RawProblem",
    "Response",
    "Rule",
    "RuleExecutionDefect",
    "RuleName",
    "RuleNamePrefix",
    "RuleRegistry",
    "ServiceRule",
    "SuppressionIndex",
    "any_problems",
    "build_config_sequence",
    "has_problems",
    "is_enabled",
    "lint",
    "load_config_file",
    "merge",
]
