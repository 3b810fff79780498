"""
Schema validation utilities for dependency and schedule CSV files.

Checks columns and column types only. Row values (dependency types,
negative durations) are checked by the data loader.
"""

from pathlib import Path
from typing import Type, List, Optional, Dict, Tuple
import pandas as pd
from pydantic import BaseModel


class SchemaValidationError(Exception):
    """Raised when schema validation fails."""

    def __init__(
        self,
        message: str,
        missing_columns: Optional[List[str]] = None,
        type_mismatches: Optional[Dict[str, Tuple[str, str]]] = None,
        extra_columns: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.missing_columns = missing_columns or []
        self.type_mismatches = type_mismatches or {}
        self.extra_columns = extra_columns or []


def pandas_dtype_to_python_type(dtype) -> str:
    """Convert pandas dtype to a simplified type string."""
    dtype_str = str(dtype)

    if dtype_str.startswith('int'):
        return 'int'
    elif dtype_str.startswith('float'):
        return 'float'
    elif dtype_str in ('object', 'string', 'str'):
        return 'str'
    elif dtype_str.startswith('datetime'):
        return 'datetime'
    elif dtype_str == 'bool':
        return 'bool'
    else:
        return dtype_str


def pydantic_type_to_string(field_type) -> str:
    """Convert Pydantic field type to a simplified type string."""
    type_str = str(field_type).lower()

    for name in ('bool', 'int', 'float', 'str', 'datetime'):
        if name in type_str:
            return name

    return type_str


def types_compatible(pandas_type: str, pydantic_type: str) -> bool:
    """
    Check if pandas type is compatible with pydantic type.

    Lenient because CSV type inference is imprecise: an all-empty column
    comes back as float, and integers are fine where floats are expected.
    """
    if pandas_type == pydantic_type:
        return True

    # All-NaN columns are inferred as float
    if pandas_type == 'float' and pydantic_type in ('str', 'bool'):
        return True

    if pandas_type in ('int', 'float') and pydantic_type in ('int', 'float'):
        return True

    # Mixed or empty object columns
    if pandas_type == 'str' and pydantic_type in ('int', 'float', 'bool'):
        return True

    return False


def validate_dataframe(
    df: pd.DataFrame,
    schema: Type[BaseModel],
    strict: bool = False,
) -> List[str]:
    """
    Validate a DataFrame against a Pydantic schema.

    Args:
        df: DataFrame to validate
        schema: Pydantic model class defining expected columns
        strict: If True, fail on extra columns not in schema

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    schema_fields = schema.model_fields
    required_columns = {name for name, info in schema_fields.items() if info.is_required()}
    expected_columns = set(schema_fields.keys())
    actual_columns = set(df.columns)

    missing = required_columns - actual_columns
    if missing:
        errors.append(f"Missing required columns: {sorted(missing)}")

    extra = actual_columns - expected_columns
    if extra and strict:
        errors.append(f"Unexpected columns (strict mode): {sorted(extra)}")

    type_mismatches = {}
    for col in sorted(expected_columns & actual_columns):
        pandas_type = pandas_dtype_to_python_type(df[col].dtype)
        pydantic_type = pydantic_type_to_string(schema_fields[col].annotation)
        if not types_compatible(pandas_type, pydantic_type):
            type_mismatches[col] = (pandas_type, pydantic_type)

    if type_mismatches:
        mismatch_strs = [
            f"{col}: got {got}, expected {expected}"
            for col, (got, expected) in type_mismatches.items()
        ]
        errors.append(f"Type mismatches: {'; '.join(mismatch_strs)}")

    return errors


def require_valid_dataframe(
    df: pd.DataFrame,
    schema: Type[BaseModel],
    source: str,
    strict: bool = False,
) -> None:
    """
    Validate a DataFrame and raise SchemaValidationError on any problem.

    Args:
        df: DataFrame to validate
        schema: Pydantic model class defining expected columns
        source: File name or label used in the error message
        strict: If True, fail on extra columns not in schema
    """
    errors = validate_dataframe(df, schema, strict=strict)
    if errors:
        schema_fields = schema.model_fields
        missing = sorted(
            name for name, info in schema_fields.items()
            if info.is_required() and name not in df.columns
        )
        extra = sorted(set(df.columns) - set(schema_fields.keys()))
        raise SchemaValidationError(
            f"Schema validation failed for '{source}':\n"
            + "\n".join(f"  - {e}" for e in errors),
            missing_columns=missing,
            extra_columns=extra,
        )


def validated_df_to_csv(
    df: pd.DataFrame,
    file_path: Path,
    schema: Optional[Type[BaseModel]] = None,
    strict: bool = False,
    **to_csv_kwargs,
) -> None:
    """
    Validate a DataFrame against its schema and write to CSV.

    Args:
        df: DataFrame to write
        file_path: Output path
        schema: Schema to validate against (default: looked up by file name)
        strict: If True, fail on extra columns not in schema
        **to_csv_kwargs: Additional arguments passed to df.to_csv()

    Raises:
        SchemaValidationError: If validation fails
        KeyError: If no schema is given or registered for this file
    """
    from .registry import get_schema_for_file

    file_path = Path(file_path)

    if schema is None:
        schema = get_schema_for_file(file_path.name)
        if schema is None:
            raise KeyError(f"No schema registered for '{file_path.name}'")

    require_valid_dataframe(df, schema, file_path.name, strict=strict)

    file_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(file_path, **to_csv_kwargs)
