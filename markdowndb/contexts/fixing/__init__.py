"""
Fixing Context

Responsibilities:
- Proposes one mechanical edit per validation diagnostic
- Applies an edit to raw template text and reports the cursor position
- Re-locates anchors in the current text so stale fixes are detected

Owns: Fix descriptors, text offset scanning
Never: Decides validity (validation context) or applies fixes without a caller
"""

from markdowndb.contexts.fixing.applier import apply_fix
from markdowndb.contexts.fixing.exceptions import UnsupportedFixError
from markdowndb.contexts.fixing.fix_data_structure import FixDescriptor, FixResult, FixType
from markdowndb.contexts.fixing.generator import (
    DEFAULT_ENTRY_PREFIXES,
    generate_fix,
    generate_fixes,
)

__all__ = [
    # Generation
    "generate_fix",
    "generate_fixes",
    "DEFAULT_ENTRY_PREFIXES",
    # Application
    "apply_fix",
    # Data structures
    "FixDescriptor",
    "FixResult",
    "FixType",
    # Exceptions
    "UnsupportedFixError",
]
