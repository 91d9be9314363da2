"""Selection validator.

Reports diagnostics for a loaded SelectionSpec. Configuration content is
never fatal, so every finding here is a warning.
"""

from .schema import SelectionSpec, ValidationError, ValidationResult


def validate_selection(spec: SelectionSpec) -> ValidationResult:
    """Validate a merged SelectionSpec.

    Checks:
    - Unrecognized lines
    - Names that are both included and excluded (exclusion wins)
    - Unknown-only configurations, which fall back to running everything

    Args:
        spec: SelectionSpec to validate.

    Returns:
        ValidationResult with warnings.
    """
    warnings: list[ValidationError] = []

    for i, item in enumerate(spec.unknown):
        warnings.append(ValidationError(
            path=f"unknown[{i}]",
            message=f"Unrecognized selection '{item.line}' ({item.source}).",
        ))

    for name in sorted(spec.included_tests & spec.excluded_tests):
        warnings.append(ValidationError(
            path=f"unittests.{name}",
            message=f"Block '{name}' is both included and excluded; it will be skipped.",
        ))

    for name in sorted(spec.included_modules & spec.excluded_modules):
        warnings.append(ValidationError(
            path=f"modules.{name}",
            message=f"Module '{name}' is both included and excluded; it will be skipped.",
        ))

    if spec.is_empty and spec.has_unknowns:
        warnings.append(ValidationError(
            path="selection",
            message="No valid selections found. All unit tests will run.",
        ))

    return ValidationResult(warnings=warnings)
