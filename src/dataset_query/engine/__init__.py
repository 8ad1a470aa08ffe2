"""Schema inference and query evaluation over schemaless JSON records.

This package provides:
- Field type inference and camel-case field naming
- Schema derivation and record normalization
- Filtering, sorting, pagination and distinct values
- The remote JSON data source and the per-request service
"""

from dataset_query.engine.inference import infer_field_type
from dataset_query.engine.naming import to_field_name
from dataset_query.engine.normalizer import normalize_record, normalize_records
from dataset_query.engine.query import distinct_values, filter_rows, paginate_rows, sort_rows
from dataset_query.engine.schema_builder import build_schema
from dataset_query.engine.service import DatasetService
from dataset_query.engine.source import DataSource, JsonDataSource
from dataset_query.engine.values import to_typed_value

__all__ = [
    # Schema inference
    "infer_field_type",
    "to_field_name",
    "build_schema",
    # Normalization and typed values
    "normalize_record",
    "normalize_records",
    "to_typed_value",
    # Query evaluation
    "filter_rows",
    "sort_rows",
    "paginate_rows",
    "distinct_values",
    # Data access
    "DataSource",
    "JsonDataSource",
    "DatasetService",
]
