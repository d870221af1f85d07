from .gate import DiagnosticSink, LoggingDiagnosticSink, NullDiagnosticSink, ValidationGate
from .rules import FieldError, FieldRule, RuleSet, ValidationResult

__all__ = [
    "DiagnosticSink",
    "FieldError",
    "FieldRule",
    "LoggingDiagnosticSink",
    "NullDiagnosticSink",
    "RuleSet",
    "ValidationGate",
    "ValidationResult",
]
