import base64
import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pyarrow as pa
import pyarrow.parquet as pq

# Largest integer a JSON consumer can hold in a double without losing precision
MAX_SAFE_INTEGER = 2 ** 53 - 1

BIGINT_LABEL = "bigint (stringified)"


def column_type_label(arrow_type: pa.DataType) -> str:
    """Map an Arrow type to the label shown next to the column name"""
    types = pa.types

    if types.is_dictionary(arrow_type):
        return column_type_label(arrow_type.value_type)
    if types.is_null(arrow_type):
        return "null"
    if types.is_boolean(arrow_type):
        return "boolean"
    if types.is_int64(arrow_type) or types.is_uint64(arrow_type):
        return BIGINT_LABEL
    if types.is_integer(arrow_type) or types.is_floating(arrow_type):
        return "number"
    if types.is_decimal(arrow_type):
        return "decimal (stringified)"
    if types.is_string(arrow_type) or types.is_large_string(arrow_type):
        return "string"
    if (types.is_binary(arrow_type) or types.is_large_binary(arrow_type)
            or types.is_fixed_size_binary(arrow_type)):
        return "binary (base64)"
    if types.is_map(arrow_type) or types.is_struct(arrow_type):
        return "object"
    if (types.is_list(arrow_type) or types.is_large_list(arrow_type)
            or types.is_fixed_size_list(arrow_type)):
        return "array"
    if types.is_timestamp(arrow_type):
        return "timestamp"
    if types.is_date(arrow_type):
        return "date"
    if types.is_time(arrow_type):
        return "time"
    if types.is_duration(arrow_type):
        return "duration"

    return str(arrow_type)


def make_transport_safe(value: Any) -> Any:
    """
    Convert a value of unknown type into plain JSON-compatible structures.
    Integers beyond the safe range become decimal strings, NaN/Infinity become None.
    """
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value.total_seconds())
    if isinstance(value, dict):
        return {str(k): make_transport_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [make_transport_safe(v) for v in value]

    return str(value)


class ParquetProcessor:
    """Decode Parquet files into transport-safe rows and column metadata"""

    def read_rows(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        return pq.read_table(path).to_pylist()

    def read_schema(self, path: Union[str, Path]) -> pa.Schema:
        return pq.read_schema(path)

    def describe_columns(self, schema: pa.Schema) -> List[Dict[str, str]]:
        """
        Column metadata comes from the file schema, so it is the same
        whether the file has rows or not.
        """
        return [
            {"name": field.name, "type": column_type_label(field.type)}
            for field in schema
        ]

    def to_transport(self, value: Any, arrow_type: Optional[pa.DataType]) -> Any:
        """
        Rewrite one decoded value into JSON-safe form, guided by its Arrow type.
        Every 64-bit integer, nested ones included, becomes its decimal string.
        """
        if value is None:
            return None
        if arrow_type is None:
            return make_transport_safe(value)

        types = pa.types
        if types.is_dictionary(arrow_type):
            arrow_type = arrow_type.value_type

        if types.is_int64(arrow_type) or types.is_uint64(arrow_type):
            return str(value)

        if types.is_map(arrow_type):
            # pyarrow yields maps as a list of (key, item) pairs
            return {
                str(self.to_transport(k, arrow_type.key_type)): self.to_transport(v, arrow_type.item_type)
                for k, v in value
            }

        if (types.is_list(arrow_type) or types.is_large_list(arrow_type)
                or types.is_fixed_size_list(arrow_type)):
            return [self.to_transport(v, arrow_type.value_type) for v in value]

        if types.is_struct(arrow_type):
            fields = [arrow_type.field(i) for i in range(arrow_type.num_fields)]
            return {
                field.name: self.to_transport(value.get(field.name), field.type)
                for field in fields
            }

        return make_transport_safe(value)

    def sanitize_rows(self, rows: List[Dict[str, Any]], schema: pa.Schema) -> List[Dict[str, Any]]:
        column_types = {field.name: field.type for field in schema}
        return [
            {name: self.to_transport(value, column_types.get(name)) for name, value in row.items()}
            for row in rows
        ]

    def process(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Full pipeline for one file: decode -> describe columns -> sanitize.
        Runs synchronously, callers in async code should push it to a thread.
        """
        rows = self.read_rows(path)
        schema = self.read_schema(path)

        return {
            "data": self.sanitize_rows(rows, schema),
            "columns": self.describe_columns(schema),
        }
