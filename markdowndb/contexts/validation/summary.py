"""Plain-text rendering of validation results for display surfaces."""

from markdowndb.contexts.validation.diagnostics import Diagnostic, ValidationResult


def _format_block(header: str, diagnostics: list[Diagnostic]) -> list[str]:
    if not diagnostics:
        return []
    lines = [f"\n\n{header} ({len(diagnostics)}):"]
    lines.extend(f"  - {diagnostic.message}" for diagnostic in diagnostics)
    return lines


def get_validation_summary(result: ValidationResult, label: str = "Template") -> str:
    """
    Render a human-readable report of a validation result.

    Args:
        result: Result from validate_template()
        label: Document noun used in the header (e.g., "Job", "Profile")

    Returns:
        Header line (✅/❌) followed by error, warning and info blocks

    Example:
        ❌ Job has errors that should be fixed.


        🔴 Errors (1):
          - Required field "COMPANY" is missing or empty
    """
    if result.valid:
        parts = [f"✅ {label} is valid!"]
    else:
        parts = [f"❌ {label} has errors that should be fixed."]

    parts.extend(_format_block("🔴 Errors", result.errors))
    parts.extend(_format_block("🟡 Warnings", result.warnings))
    parts.extend(_format_block("ℹ️ Info", result.info))

    return "\n".join(parts)
