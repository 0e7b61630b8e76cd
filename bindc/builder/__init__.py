"""
bindc.builder: IR builders and the declaration classifier.

Modules:
  - classify: dispatch by declaration kind, source preservation, unused check
  - function: Callable builder (receivers, callbacks, Self substitution, naming)
  - generics: callable-trait bound scan
  - record: Record builder and registration
  - impl: MethodBlock builder
  - enumeration: Enumeration builder and discriminant rules
  - docs: documentation line extraction
"""

from .classify import classify
from .enumeration import build_enumeration
from .function import build_callable
from .impl import build_method_block
from .record import build_record

__all__ = ["classify", "build_callable", "build_record", "build_method_block", "build_enumeration"]
