"""
Core math modules для ta_stream

Numeric Value: десятичная арифметика фиксированной точности с явными ошибками.
"""

from ta_stream.core.math.numeric import (
    # Constants
    FIFTY,
    HUNDRED,
    ONE,
    THREE,
    TWO,
    ZERO,
    # Configuration
    NumericConfig,
    NumericLike,
    configure_numeric,
    get_numeric_config,
    numeric_scope,
    # Conversion
    from_period,
    to_display,
    to_numeric,
    to_period,
    # Safe operations
    clamp,
    max3,
    safe_divide,
    sqrt,
    # Validation
    validate_non_negative,
    validate_period,
)

__all__ = [
    # Constants
    "ZERO",
    "ONE",
    "TWO",
    "THREE",
    "FIFTY",
    "HUNDRED",
    # Configuration
    "NumericConfig",
    "NumericLike",
    "configure_numeric",
    "get_numeric_config",
    "numeric_scope",
    # Conversion
    "to_numeric",
    "to_period",
    "from_period",
    "to_display",
    # Safe operations
    "safe_divide",
    "sqrt",
    "clamp",
    "max3",
    # Validation
    "validate_period",
    "validate_non_negative",
]
