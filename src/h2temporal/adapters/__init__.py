"""
Read-path adapters package.

This package provides the following components:

- type_conversion: TemporalConverter and the per-shape conversion functions
- registry: source tag classification and the ReadConverterRegistry
- column_info: Column metadata from cursor descriptions

Type conversion principles:
1. Database → Python: driver-native temporal values are converted by the
   registry a connection was created with
2. Python → Database: parameters are handed to the driver unmodified
"""

from h2temporal.adapters.column_info import Column
from h2temporal.adapters.registry import ReadConverterRegistry, SourceTag
from h2temporal.adapters.registry import default_registry, passthrough_registry
from h2temporal.adapters.registry import source_tag
from h2temporal.adapters.type_conversion import TemporalConverter
from h2temporal.adapters.type_conversion import convert_date, convert_time
from h2temporal.adapters.type_conversion import convert_timestamp
from h2temporal.adapters.type_conversion import convert_timestamp_with_offset
from h2temporal.adapters.type_conversion import convert_timestamp_with_time_zone
